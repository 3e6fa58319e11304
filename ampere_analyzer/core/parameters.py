"""
Ampere Analyzer - Simulation Parameters
=======================================
Immutable, SI-normalized parameter set for a single run, and the normalizer
that resolves raw analyzer inputs plus a cooling profile into it.

Author: Ampere Analyzer Tool
Version: 1.0.0
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Any

from .config import AnalyzerInputs
from .constants import (
    ConductionVariant, CoolingProfileCatalog, SimulationDefaults,
    TransistorType, UnitConversions,
)


class SimulationMode(Enum):
    """Which limits a run checks."""
    TEMP = "temp"      # Junction temperature only
    BUDGET = "budget"  # Cooling budget only
    FTF = "ftf"        # First-to-fail: every limit


class SearchAlgorithm(Enum):
    """Current search strategy."""
    ITERATIVE = "iterative"
    BINARY = "binary"


class ParameterValidationError(ValueError):
    """Parameters are structurally invalid; no run was started."""

    def __init__(self, issues: List[str]):
        self.issues = list(issues)
        super().__init__("Invalid simulation parameters: " + "; ".join(self.issues))


@dataclass(frozen=True)
class ConductionModel:
    """Conduction-loss variant and its single authoritative device value.

    RESISTIVE carries Rds(on) in ohms, SATURATION carries Vce(sat) in volts.
    """
    variant: ConductionVariant
    value: float

    @classmethod
    def resistive(cls, rds_on_ohms: float) -> 'ConductionModel':
        return cls(ConductionVariant.RESISTIVE, rds_on_ohms)

    @classmethod
    def saturation(cls, vce_sat: float) -> 'ConductionModel':
        return cls(ConductionVariant.SATURATION, vce_sat)

    @property
    def rds_on_ohms(self) -> Optional[float]:
        return self.value if self.variant is ConductionVariant.RESISTIVE else None

    @property
    def vce_sat(self) -> Optional[float]:
        return self.value if self.variant is ConductionVariant.SATURATION else None


@dataclass(frozen=True)
class SimulationParameters:
    """Fully specified run parameters in SI units.

    Construction validates the parameter set, so an instance is always
    safe to hand to the search engine.
    """
    conduction: ConductionModel
    max_current: float  # A
    max_voltage: float  # V
    rise_time_s: float
    fall_time_s: float
    switching_frequency_hz: float
    rth_jc: float  # °C/W
    cooling_thermal_resistance: float  # °C/W
    max_temperature: float  # °C
    ambient_temperature: float  # °C
    simulation_mode: SimulationMode
    effective_cooling_budget: float  # W
    algorithm: SearchAlgorithm = SearchAlgorithm.ITERATIVE
    precision_steps: int = SimulationDefaults.DEFAULT_PRECISION_STEPS
    power_dissipation_rating: Optional[float] = None  # W
    cooling_profile_id: str = ""
    transistor_type: TransistorType = TransistorType.N_CHANNEL_MOSFET
    total_rth: float = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, 'total_rth', self.rth_jc + self.cooling_thermal_resistance)
        self.validate()

    def validate(self):
        """Raise ParameterValidationError listing every structural problem."""
        issues = []

        if not isinstance(self.conduction, ConductionModel):
            issues.append("conduction model is required")
        elif not _positive(self.conduction.value):
            label = "Rds(on)" if self.conduction.variant is ConductionVariant.RESISTIVE else "Vce(sat)"
            issues.append(f"{label} must be a positive number")

        for name in ('max_current', 'max_voltage', 'rise_time_s', 'fall_time_s',
                     'switching_frequency_hz', 'rth_jc', 'effective_cooling_budget'):
            if not _positive(getattr(self, name)):
                issues.append(f"{name} must be a positive number")

        for name in ('cooling_thermal_resistance', 'max_temperature', 'ambient_temperature'):
            if not _finite(getattr(self, name)):
                issues.append(f"{name} must be a finite number")

        if _finite(self.max_temperature) and self.max_temperature <= 0:
            issues.append("max_temperature must be a positive number")

        if _finite(self.cooling_thermal_resistance) and self.cooling_thermal_resistance < 0:
            issues.append("cooling_thermal_resistance must not be negative")
        if not _positive(self.total_rth):
            issues.append("total thermal resistance must be positive")

        if self.power_dissipation_rating is not None and not _positive(self.power_dissipation_rating):
            issues.append("power_dissipation_rating must be positive when given")

        if not isinstance(self.simulation_mode, SimulationMode):
            issues.append(f"unknown simulation mode: {self.simulation_mode!r}")
        if not isinstance(self.algorithm, SearchAlgorithm):
            issues.append(f"unknown search algorithm: {self.algorithm!r}")

        steps = self.precision_steps
        if isinstance(steps, bool) or not isinstance(steps, int):
            issues.append("precision_steps must be an integer")
        elif not (SimulationDefaults.MIN_PRECISION_STEPS <= steps <= SimulationDefaults.MAX_PRECISION_STEPS):
            issues.append(
                f"precision_steps must be between {SimulationDefaults.MIN_PRECISION_STEPS} "
                f"and {SimulationDefaults.MAX_PRECISION_STEPS}, got {steps}"
            )

        if issues:
            raise ParameterValidationError(issues)

    @property
    def tolerance(self) -> float:
        """Current resolution shared by both search algorithms (A)."""
        return self.max_current / self.precision_steps

    def to_dict(self) -> Dict[str, Any]:
        """Flat, JSON-friendly view used for logging and history records."""
        return {
            'transistor_type': self.transistor_type.value,
            'conduction_variant': self.conduction.variant.value,
            'rds_on_ohms': self.conduction.rds_on_ohms,
            'vce_sat': self.conduction.vce_sat,
            'max_current': self.max_current,
            'max_voltage': self.max_voltage,
            'rise_time_s': self.rise_time_s,
            'fall_time_s': self.fall_time_s,
            'switching_frequency_hz': self.switching_frequency_hz,
            'rth_jc': self.rth_jc,
            'cooling_profile_id': self.cooling_profile_id,
            'cooling_thermal_resistance': self.cooling_thermal_resistance,
            'total_rth': self.total_rth,
            'max_temperature': self.max_temperature,
            'ambient_temperature': self.ambient_temperature,
            'simulation_mode': self.simulation_mode.value,
            'effective_cooling_budget': self.effective_cooling_budget,
            'power_dissipation_rating': self.power_dissipation_rating,
            'algorithm': self.algorithm.value,
            'precision_steps': self.precision_steps,
        }


def _finite(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _positive(value) -> bool:
    return _finite(value) and value > 0


def _scaled(value, convert):
    # Leave malformed values untouched so validation can report them
    return convert(value) if _finite(value) else value


def _coerce_steps(value):
    # JSON round-trips may turn 200 into 200.0
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def normalize_inputs(inputs: AnalyzerInputs,
                     catalog: Optional[CoolingProfileCatalog] = None) -> SimulationParameters:
    """
    Resolve raw inputs and the selected cooling profile into SI parameters.

    Args:
        inputs: Analyzer inputs in datasheet units (mΩ, ns, kHz)
        catalog: Cooling profile catalog; the default catalog when omitted

    Returns:
        Validated SimulationParameters

    Raises:
        ParameterValidationError: if inputs are missing or out of range
    """
    catalog = catalog if catalog is not None else CoolingProfileCatalog()
    issues = []

    try:
        mode = SimulationMode(inputs.simulation_mode)
    except ValueError:
        mode = None
        issues.append(f"unknown simulation mode: {inputs.simulation_mode!r}")

    try:
        algorithm = SearchAlgorithm(inputs.simulation_algorithm)
    except ValueError:
        algorithm = None
        issues.append(f"unknown search algorithm: {inputs.simulation_algorithm!r}")

    profile = catalog.get(inputs.cooling_profile_id)
    if profile is None:
        issues.append(f"unknown cooling profile: {inputs.cooling_profile_id!r}")

    transistor_type = TransistorType.from_string(inputs.transistor_type)
    if transistor_type.conduction_variant is ConductionVariant.RESISTIVE:
        if not _positive(inputs.rds_on_mohm):
            issues.append("Rds(on) is required for this transistor type and must be positive")
            conduction = None
        else:
            conduction = ConductionModel.resistive(UnitConversions.mohm_to_ohm(inputs.rds_on_mohm))
    else:
        if not _positive(inputs.vce_sat):
            issues.append("Vce(sat) is required for this transistor type and must be positive")
            conduction = None
        else:
            conduction = ConductionModel.saturation(inputs.vce_sat)

    effective_budget = profile.cooling_budget if profile else None
    if mode is SimulationMode.BUDGET:
        if not _positive(inputs.cooling_budget):
            issues.append("cooling budget must be a positive number for budget mode")
        else:
            effective_budget = inputs.cooling_budget

    power_rating = inputs.power_dissipation
    if power_rating is not None:
        if not _finite(power_rating):
            issues.append("power_dissipation_rating must be a number")
        elif power_rating <= 0:
            # Datasheet lookups report unknown Pd as 0
            power_rating = None

    if issues:
        raise ParameterValidationError(issues)

    return SimulationParameters(
        conduction=conduction,
        max_current=inputs.max_current,
        max_voltage=inputs.max_voltage,
        rise_time_s=_scaled(inputs.rise_time_ns, UnitConversions.ns_to_s),
        fall_time_s=_scaled(inputs.fall_time_ns, UnitConversions.ns_to_s),
        switching_frequency_hz=_scaled(inputs.switching_frequency_khz, UnitConversions.khz_to_hz),
        rth_jc=inputs.rth_jc,
        cooling_thermal_resistance=profile.thermal_resistance,
        max_temperature=inputs.max_temperature,
        ambient_temperature=inputs.ambient_temperature,
        simulation_mode=mode,
        effective_cooling_budget=effective_budget,
        algorithm=algorithm,
        precision_steps=_coerce_steps(inputs.precision_steps),
        power_dissipation_rating=power_rating,
        cooling_profile_id=profile.id,
        transistor_type=transistor_type,
    )


__all__ = [
    'SimulationMode',
    'SearchAlgorithm',
    'ConductionModel',
    'ParameterValidationError',
    'SimulationParameters',
    'normalize_inputs',
]
