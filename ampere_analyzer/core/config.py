"""
Ampere Analyzer - Configuration Management
==========================================
Raw analyzer inputs (as entered, in datasheet units) and JSON serialization.

Author: Ampere Analyzer Tool
Version: 1.0.0
"""

import json
from typing import Dict, Optional, Any
from dataclasses import dataclass, asdict, fields, replace
from pathlib import Path

from .constants import SimulationDefaults, TransistorDatabase, TransistorSpecs
from ..utils.logger import get_logger


@dataclass
class AnalyzerInputs:
    """Analyzer inputs in datasheet units (mΩ, ns, kHz).

    These are normalized into SI SimulationParameters before a run.
    """
    component_name: str = ""
    predefined_component: str = ""

    # Core specs
    transistor_type: str = "MOSFET (N-Channel)"
    max_current: float = 0.0  # A
    max_voltage: float = 0.0  # V
    power_dissipation: Optional[float] = None  # W, device Pd rating
    rds_on_mohm: Optional[float] = None  # mΩ
    vce_sat: Optional[float] = None  # V
    rise_time_ns: float = 0.0
    fall_time_ns: float = 0.0
    rth_jc: float = 0.0  # °C/W
    max_temperature: float = SimulationDefaults.DEFAULT_MAX_TEMP_C

    # Simulation constraints
    switching_frequency_khz: float = SimulationDefaults.DEFAULT_SWITCHING_FREQUENCY_KHZ
    ambient_temperature: float = SimulationDefaults.DEFAULT_AMBIENT_TEMP_C
    cooling_profile_id: str = SimulationDefaults.DEFAULT_COOLING_PROFILE
    cooling_budget: Optional[float] = None  # W, overrides the profile budget in budget mode
    simulation_mode: str = SimulationDefaults.DEFAULT_MODE
    simulation_algorithm: str = SimulationDefaults.DEFAULT_ALGORITHM
    precision_steps: int = SimulationDefaults.DEFAULT_PRECISION_STEPS

    @property
    def display_name(self) -> str:
        """Name shown in summaries and history."""
        if self.predefined_component:
            part = TransistorDatabase.get(self.predefined_component)
            if part:
                return part.name
        return self.component_name or "N/A"

    def with_specs(self, specs: TransistorSpecs) -> 'AnalyzerInputs':
        """Return a copy populated from datasheet specs.

        Only the field matching the device's conduction variant is kept.
        """
        is_mosfet = specs.transistor_type.is_mosfet_type
        return replace(
            self,
            transistor_type=specs.transistor_type.value,
            max_current=specs.max_current,
            max_voltage=specs.max_voltage,
            power_dissipation=specs.power_dissipation,
            rth_jc=specs.rth_jc,
            max_temperature=specs.max_temperature,
            rise_time_ns=specs.rise_time_ns,
            fall_time_ns=specs.fall_time_ns,
            rds_on_mohm=specs.rds_on_mohm if is_mosfet else None,
            vce_sat=None if is_mosfet else specs.vce_sat,
        )

    @classmethod
    def from_predefined(cls, value: str, **overrides) -> 'AnalyzerInputs':
        """Build inputs from a predefined transistor, then apply overrides."""
        part = TransistorDatabase.get(value)
        if part is None:
            raise KeyError(f"Unknown predefined transistor: {value}")
        inputs = cls(predefined_component=part.value, component_name=part.name).with_specs(part.specs)
        return replace(inputs, **overrides) if overrides else inputs

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AnalyzerInputs':
        """Create from dictionary, ignoring unknown keys."""
        allowed = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in (data or {}).items() if k in allowed})


class ConfigManager:
    """Manages loading and saving analyzer inputs."""

    def __init__(self, config_path: str = ""):
        self._config_path: Optional[Path] = Path(config_path) if config_path else None
        self.config: Optional[AnalyzerInputs] = None
        self.logger = get_logger()

    def get_config(self) -> AnalyzerInputs:
        """Get configuration, loading from file if it exists."""
        if self.config:
            return self.config

        if self._config_path and self._config_path.exists():
            try:
                with open(self._config_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                self.config = AnalyzerInputs.from_dict(data)
            except (OSError, ValueError, TypeError) as e:
                self.logger.warning(f"Failed to load config {self._config_path}: {e}")
                self.config = AnalyzerInputs()
        else:
            self.config = AnalyzerInputs()

        return self.config

    def save(self) -> bool:
        """Save configuration to its file."""
        if not self.config or not self._config_path:
            return False
        return self.export(str(self._config_path))

    def export(self, path: str) -> bool:
        """Export configuration to specified path."""
        if not self.config:
            return False

        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(self.config.to_dict(), f, indent=2)
            return True
        except OSError as e:
            self.logger.error(f"Failed to save config to {path}: {e}")
            return False

    def import_config(self, path: str) -> bool:
        """Import configuration from file."""
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            self.config = AnalyzerInputs.from_dict(data)
            return True
        except (OSError, ValueError, TypeError) as e:
            self.logger.error(f"Failed to import config from {path}: {e}")
            return False


__all__ = [
    'AnalyzerInputs',
    'ConfigManager',
]
