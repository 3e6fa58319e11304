"""
Ampere Analyzer - Analytical Limit Currents
===========================================
Closed-form reference for the search engine.

Every power-type limit maps to a power ceiling P_limit:
    junction temperature:  P_limit = (T_max - T_amb) / (Rth_jc + Rth_cooling)
    cooling budget:        P_limit = effective budget
    power rating:          P_limit = Pd (first-to-fail only, when known)

and the limit current is the root of total_loss(I) = P_limit on
[0, max_current]. total_loss is continuous and non-decreasing, so the
bracket holds at most one crossing and brentq converges on it.

The sampled searches land at or below these values, within one tolerance step.

Author: Ampere Analyzer Tool
Version: 1.0.0
"""

from dataclasses import dataclass
from typing import Dict, Any, Optional, Tuple

from scipy.optimize import root_scalar

from ..core.parameters import SimulationParameters
from ..utils.logger import get_logger
from .loss_model import total_loss
from .safety import FailureReason, active_limits


@dataclass(frozen=True)
class LimitCurrent:
    """Current at which one limit is reached."""
    reason: FailureReason
    power_limit: float  # W
    current: Optional[float]  # A, None when not reached up to max_current

    @property
    def reached(self) -> bool:
        return self.current is not None


@dataclass(frozen=True)
class ExpectedLimits:
    """Analytical limit currents for every active power-type limit."""
    max_current: float
    limits: Tuple[LimitCurrent, ...]
    governing: Optional[LimitCurrent]

    @property
    def expected_max_safe_current(self) -> float:
        if self.governing is None:
            return self.max_current
        return self.governing.current

    def to_dict(self) -> Dict[str, Any]:
        return {
            'expected_max_safe_current': self.expected_max_safe_current,
            'governing_reason': self.governing.reason.value if self.governing else None,
            'limits': [
                {
                    'reason': limit.reason.value,
                    'power_limit': limit.power_limit,
                    'current': limit.current,
                }
                for limit in self.limits
            ],
        }


def power_ceiling(params: SimulationParameters, reason: FailureReason) -> Optional[float]:
    """Highest total loss allowed by a limit, or None if it is not power-based."""
    if reason is FailureReason.JUNCTION_TEMPERATURE:
        return (params.max_temperature - params.ambient_temperature) / params.total_rth
    if reason is FailureReason.POWER_BUDGET:
        return params.effective_cooling_budget
    if reason is FailureReason.POWER_RATING:
        return params.power_dissipation_rating
    return None


def solve_limit_current(params: SimulationParameters, power_limit: float) -> Optional[float]:
    """
    Solve total_loss(I) = power_limit on [0, max_current].

    Returns:
        The crossing current, 0.0 if the limit is already exceeded at zero
        current, or None if max_current stays within the limit
    """
    if power_limit <= 0:
        return 0.0
    if total_loss(params, params.max_current) <= power_limit:
        return None

    sol = root_scalar(
        lambda current: total_loss(params, current) - power_limit,
        method='brentq',
        bracket=[0.0, params.max_current],
    )
    if not sol.converged:
        raise RuntimeError(f"Limit current did not converge: {sol.flag}")
    return float(sol.root)


def compute_expected_limits(params: SimulationParameters) -> ExpectedLimits:
    """Solve every active power-type limit and pick the one reached first."""
    logger = get_logger()
    limits = []
    for reason in active_limits(params.simulation_mode):
        ceiling = power_ceiling(params, reason)
        if ceiling is None:
            continue
        current = solve_limit_current(params, ceiling)
        logger.debug(f"{reason.label} limit: P={ceiling:.3f}W -> I={current}")
        limits.append(LimitCurrent(reason=reason, power_limit=ceiling, current=current))

    reached = [limit for limit in limits if limit.reached]
    # min() keeps the earliest entry on ties, which follows reporting priority
    governing = min(reached, key=lambda limit: limit.current) if reached else None

    return ExpectedLimits(
        max_current=params.max_current,
        limits=tuple(limits),
        governing=governing,
    )


__all__ = [
    'LimitCurrent',
    'ExpectedLimits',
    'power_ceiling',
    'solve_limit_current',
    'compute_expected_limits',
]
