"""
Ampere Analyzer - Safety Evaluator
==================================
Applies the active simulation mode's limit checks to a loss-model output.

First-to-fail runs check every limit and, when several trip at the same
current, report the first one in FTF_PRIORITY.

Author: Ampere Analyzer Tool
Version: 1.0.0
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from ..core.parameters import SimulationMode, SimulationParameters
from .loss_model import LossBreakdown, evaluate_losses


class FailureReason(Enum):
    """Limit that made a current unsafe."""
    JUNCTION_TEMPERATURE = "junction-temperature-exceeded"
    POWER_BUDGET = "power-budget-exceeded"
    POWER_RATING = "power-rating-exceeded"
    CURRENT_RATING = "current-rating-exceeded"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    FailureReason.JUNCTION_TEMPERATURE: "Thermal",
    FailureReason.POWER_BUDGET: "Cooling Budget",
    FailureReason.POWER_RATING: "Power Dissipation",
    FailureReason.CURRENT_RATING: "Current",
}

# Tie-break order for first-to-fail runs
FTF_PRIORITY = (
    FailureReason.JUNCTION_TEMPERATURE,
    FailureReason.POWER_BUDGET,
    FailureReason.POWER_RATING,
    FailureReason.CURRENT_RATING,
)

SAFE_DETAILS = "Operating within safe limits."


@dataclass(frozen=True)
class PowerDissipation:
    """Power loss breakdown in watts."""
    total: float
    conduction: float
    switching: float

    @classmethod
    def from_losses(cls, losses: LossBreakdown) -> 'PowerDissipation':
        return cls(total=losses.total, conduction=losses.conduction, switching=losses.switching)

    def to_dict(self) -> Dict[str, float]:
        return {'total': self.total, 'conduction': self.conduction, 'switching': self.switching}


@dataclass(frozen=True)
class SafetyVerdict:
    """Pass/fail verdict for one current."""
    current: float
    is_safe: bool
    failure_reason: Optional[FailureReason]
    details: str
    final_temperature: float
    power_dissipation: PowerDissipation


def _limit_tripped(reason: FailureReason, params: SimulationParameters,
                   losses: LossBreakdown) -> bool:
    if reason is FailureReason.JUNCTION_TEMPERATURE:
        return losses.junction_temperature > params.max_temperature
    if reason is FailureReason.POWER_BUDGET:
        return losses.total > params.effective_cooling_budget
    if reason is FailureReason.POWER_RATING:
        rating = params.power_dissipation_rating
        return rating is not None and losses.total > rating
    return losses.current > params.max_current


def _describe(reason: FailureReason, params: SimulationParameters, losses: LossBreakdown) -> str:
    if reason is FailureReason.JUNCTION_TEMPERATURE:
        return (f"Exceeded max junction temp of {params.max_temperature}°C. "
                f"Reached {losses.junction_temperature:.2f}°C.")
    if reason is FailureReason.POWER_BUDGET:
        return (f"Exceeded cooling budget of {params.effective_cooling_budget}W. "
                f"Reached {losses.total:.2f}W.")
    if reason is FailureReason.POWER_RATING:
        return (f"Exceeded component's max power dissipation of {params.power_dissipation_rating}W. "
                f"Reached {losses.total:.2f}W.")
    return f"Exceeded max current rating of {params.max_current:.2f}A."


def active_limits(mode: SimulationMode) -> tuple:
    """Limits checked by a mode, in reporting priority."""
    if mode is SimulationMode.TEMP:
        return (FailureReason.JUNCTION_TEMPERATURE,)
    if mode is SimulationMode.BUDGET:
        return (FailureReason.POWER_BUDGET,)
    return FTF_PRIORITY


def tripped_limits(params: SimulationParameters, losses: LossBreakdown) -> List[FailureReason]:
    """Every active limit violated by these losses, in reporting priority."""
    return [reason for reason in active_limits(params.simulation_mode)
            if _limit_tripped(reason, params, losses)]


def evaluate_safety(params: SimulationParameters, losses: LossBreakdown) -> SafetyVerdict:
    """Apply the run's limit checks to a loss-model output."""
    tripped = tripped_limits(params, losses)
    reason = tripped[0] if tripped else None
    return SafetyVerdict(
        current=losses.current,
        is_safe=reason is None,
        failure_reason=reason,
        details=_describe(reason, params, losses) if reason else SAFE_DETAILS,
        final_temperature=losses.junction_temperature,
        power_dissipation=PowerDissipation.from_losses(losses),
    )


def check_current(params: SimulationParameters, current: float) -> SafetyVerdict:
    """Evaluate losses at a current and apply the limit checks."""
    return evaluate_safety(params, evaluate_losses(params, current))


__all__ = [
    'FailureReason',
    'FTF_PRIORITY',
    'SAFE_DETAILS',
    'PowerDissipation',
    'SafetyVerdict',
    'active_limits',
    'tripped_limits',
    'evaluate_safety',
    'check_current',
]
