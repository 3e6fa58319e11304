"""
Ampere Analyzer - Constants, Cooling Profiles and Transistor Database
=====================================================================
Unit conversions, simulation defaults, the cooling profile catalog and the
predefined transistor datasheet values used to populate analyzer inputs.

Author: Ampere Analyzer Tool
Version: 1.0.0
License: MIT
"""

from dataclasses import dataclass
from typing import Dict, Optional, List
from enum import Enum


# =============================================================================
# UNIT CONVERSIONS
# =============================================================================

class UnitConversions:
    """Input-unit to SI conversion factors."""

    NS_TO_S = 1e-9
    KHZ_TO_HZ = 1e3
    MOHM_TO_OHM = 1e-3

    @staticmethod
    def ns_to_s(value_ns: float) -> float:
        return value_ns * UnitConversions.NS_TO_S

    @staticmethod
    def s_to_ns(value_s: float) -> float:
        return value_s / UnitConversions.NS_TO_S

    @staticmethod
    def khz_to_hz(value_khz: float) -> float:
        return value_khz * UnitConversions.KHZ_TO_HZ

    @staticmethod
    def hz_to_khz(value_hz: float) -> float:
        return value_hz / UnitConversions.KHZ_TO_HZ

    @staticmethod
    def mohm_to_ohm(value_mohm: float) -> float:
        return value_mohm * UnitConversions.MOHM_TO_OHM

    @staticmethod
    def ohm_to_mohm(value_ohm: float) -> float:
        return value_ohm / UnitConversions.MOHM_TO_OHM


# =============================================================================
# TRANSISTOR TYPES
# =============================================================================

class ConductionVariant(Enum):
    """Which conduction-loss formula applies to a device."""
    RESISTIVE = "resistive"    # Rds(on) * I^2
    SATURATION = "saturation"  # Vce(sat) * I


class TransistorType(Enum):
    """Supported power transistor families."""
    N_CHANNEL_MOSFET = "MOSFET (N-Channel)"
    P_CHANNEL_MOSFET = "MOSFET (P-Channel)"
    GAN_FET = "GaN FET"
    NPN_BJT = "BJT (NPN)"
    PNP_BJT = "BJT (PNP)"
    IGBT = "IGBT"

    @property
    def is_mosfet_type(self) -> bool:
        return self in (TransistorType.N_CHANNEL_MOSFET,
                        TransistorType.P_CHANNEL_MOSFET,
                        TransistorType.GAN_FET)

    @property
    def conduction_variant(self) -> ConductionVariant:
        if self.is_mosfet_type:
            return ConductionVariant.RESISTIVE
        return ConductionVariant.SATURATION

    @classmethod
    def from_string(cls, label: str) -> 'TransistorType':
        """Match a free-form type label; unknown labels map to an N-channel MOSFET."""
        for member in cls:
            if label == member.value:
                return member
        text = (label or "").upper()
        if "MOSFET" in text and "P-CHANNEL" in text:
            return cls.P_CHANNEL_MOSFET
        if "MOSFET" in text:
            return cls.N_CHANNEL_MOSFET
        if "GAN" in text:
            return cls.GAN_FET
        if "NPN" in text:
            return cls.NPN_BJT
        if "PNP" in text:
            return cls.PNP_BJT
        if "IGBT" in text:
            return cls.IGBT
        return cls.N_CHANNEL_MOSFET


# =============================================================================
# COOLING PROFILES
# =============================================================================

@dataclass(frozen=True)
class CoolingProfile:
    """Case-to-ambient cooling solution."""
    id: str
    name: str
    thermal_resistance: float  # °C/W, case-to-ambient
    cooling_budget: float  # W, maximum steady-state heat removal

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'name': self.name,
            'thermal_resistance': self.thermal_resistance,
            'cooling_budget': self.cooling_budget,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'CoolingProfile':
        return cls(**data)


class CoolingProfileCatalog:
    """Read-only lookup of cooling profiles by id."""

    DEFAULT_PROFILES = (
        CoolingProfile('passive-none', 'No Heatsink (Free Air)', 35.0, 2.0),
        CoolingProfile('passive-small', 'Small Clip-On Heatsink', 12.0, 8.0),
        CoolingProfile('passive-extruded', 'Extruded Aluminium Heatsink', 4.0, 25.0),
        CoolingProfile('air-stock', 'Stock Active Air Cooler', 0.6, 95.0),
        CoolingProfile('air-nh-d15', 'Noctua NH-D15 Air Cooler', 0.25, 250.0),
        CoolingProfile('aio-240', '240mm AIO Liquid Cooler', 0.18, 300.0),
        CoolingProfile('aio-360', '360mm AIO Liquid Cooler', 0.12, 400.0),
        CoolingProfile('custom-loop', 'Custom Water Loop', 0.08, 600.0),
        CoolingProfile('cold-plate', 'Liquid Cold Plate', 0.05, 1000.0),
    )

    def __init__(self, profiles: Optional[List[CoolingProfile]] = None):
        source = self.DEFAULT_PROFILES if profiles is None else profiles
        self._profiles: Dict[str, CoolingProfile] = {p.id: p for p in source}

    def get(self, profile_id: str) -> Optional[CoolingProfile]:
        """Get a profile by id, or None if it does not exist."""
        return self._profiles.get(profile_id)

    def __contains__(self, profile_id: str) -> bool:
        return profile_id in self._profiles

    def __iter__(self):
        return iter(self._profiles.values())

    def __len__(self) -> int:
        return len(self._profiles)

    def ids(self) -> List[str]:
        return list(self._profiles)


# =============================================================================
# PREDEFINED TRANSISTORS
# =============================================================================

@dataclass(frozen=True)
class TransistorSpecs:
    """Datasheet values in input units (mΩ, ns)."""
    transistor_type: TransistorType
    max_current: float  # A
    max_voltage: float  # V
    rth_jc: float  # °C/W
    rise_time_ns: float
    fall_time_ns: float
    max_temperature: float = 150.0  # °C
    power_dissipation: Optional[float] = None  # W
    rds_on_mohm: Optional[float] = None
    vce_sat: Optional[float] = None  # V


@dataclass(frozen=True)
class PredefinedTransistor:
    """Named catalog entry."""
    value: str
    name: str
    specs: TransistorSpecs


class TransistorDatabase:
    """Database of common power transistors."""

    MOSFETS = {
        'irfz44n': PredefinedTransistor('irfz44n', 'IRFZ44N', TransistorSpecs(
            TransistorType.N_CHANNEL_MOSFET, 49, 55, 1.5, 60, 45,
            max_temperature=175, power_dissipation=94, rds_on_mohm=17.5)),
        'irf3205': PredefinedTransistor('irf3205', 'IRF3205', TransistorSpecs(
            TransistorType.N_CHANNEL_MOSFET, 110, 55, 0.75, 101, 65,
            max_temperature=175, power_dissipation=200, rds_on_mohm=8.0)),
        'irf540n': PredefinedTransistor('irf540n', 'IRF540N', TransistorSpecs(
            TransistorType.N_CHANNEL_MOSFET, 33, 100, 1.15, 35, 35,
            max_temperature=175, power_dissipation=130, rds_on_mohm=44)),
        'irf9540n': PredefinedTransistor('irf9540n', 'IRF9540N', TransistorSpecs(
            TransistorType.P_CHANNEL_MOSFET, 23, 100, 1.1, 67, 51,
            max_temperature=175, power_dissipation=140, rds_on_mohm=117)),
        'epc2034c': PredefinedTransistor('epc2034c', 'EPC2034C', TransistorSpecs(
            TransistorType.GAN_FET, 48, 200, 0.45, 4, 4,
            max_temperature=150, rds_on_mohm=8.0)),
    }

    BIPOLAR = {
        'tip35c': PredefinedTransistor('tip35c', 'TIP35C', TransistorSpecs(
            TransistorType.NPN_BJT, 25, 100, 1.0, 600, 900,
            max_temperature=150, power_dissipation=125, vce_sat=1.8)),
        'tip36c': PredefinedTransistor('tip36c', 'TIP36C', TransistorSpecs(
            TransistorType.PNP_BJT, 25, 100, 1.0, 600, 900,
            max_temperature=150, power_dissipation=125, vce_sat=1.8)),
        'irg4pc50u': PredefinedTransistor('irg4pc50u', 'IRG4PC50U', TransistorSpecs(
            TransistorType.IGBT, 55, 600, 0.64, 25, 74,
            max_temperature=150, power_dissipation=200, vce_sat=1.65)),
    }

    @classmethod
    def get_all(cls) -> Dict[str, PredefinedTransistor]:
        """Get all parts as a flat dictionary."""
        all_parts = {}
        for category_name in ['MOSFETS', 'BIPOLAR']:
            all_parts.update(getattr(cls, category_name, {}))
        return all_parts

    @classmethod
    def get(cls, value: str) -> Optional[PredefinedTransistor]:
        return cls.get_all().get(value.lower())


# =============================================================================
# SIMULATION DEFAULTS
# =============================================================================

class SimulationDefaults:
    """Default simulation parameters."""

    # Search resolution
    DEFAULT_PRECISION_STEPS = 200
    MIN_PRECISION_STEPS = 10
    MAX_PRECISION_STEPS = 500

    # Extra bisection probes beyond ceil(log2(precision_steps))
    BISECTION_EXTRA_ITERATIONS = 2

    # Temperatures
    DEFAULT_AMBIENT_TEMP_C = 25.0
    DEFAULT_MAX_TEMP_C = 150.0

    DEFAULT_SWITCHING_FREQUENCY_KHZ = 100.0
    DEFAULT_COOLING_PROFILE = 'air-nh-d15'
    DEFAULT_MODE = 'ftf'
    DEFAULT_ALGORITHM = 'iterative'

    # Live view
    LIVE_WINDOW_POINTS = 150
    LIVE_BATCH_ITERATIVE = 5
    LIVE_BATCH_BINARY = 1
    LIVE_TICK_INTERVAL_S = 0.066

    # Limit value plotted for first-to-fail runs (percent of nearest limit)
    FTF_LIMIT_VALUE = 100.0

    HISTORY_LIMIT = 50


__all__ = [
    'UnitConversions',
    'ConductionVariant',
    'TransistorType',
    'CoolingProfile',
    'CoolingProfileCatalog',
    'TransistorSpecs',
    'PredefinedTransistor',
    'TransistorDatabase',
    'SimulationDefaults',
]
