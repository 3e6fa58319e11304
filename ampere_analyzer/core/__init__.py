"""
Ampere Analyzer - Core Module
=============================
Core data structures, configuration, parameters and run history.
"""

from .constants import (
    UnitConversions, ConductionVariant, TransistorType,
    CoolingProfile, CoolingProfileCatalog,
    TransistorSpecs, PredefinedTransistor, TransistorDatabase,
    SimulationDefaults
)

from .config import AnalyzerInputs, ConfigManager

from .parameters import (
    SimulationMode, SearchAlgorithm, ConductionModel,
    ParameterValidationError, SimulationParameters, normalize_inputs
)

from .history import HistoryEntry, RunHistory

__all__ = [
    # Constants & Catalogs
    'UnitConversions', 'ConductionVariant', 'TransistorType',
    'CoolingProfile', 'CoolingProfileCatalog',
    'TransistorSpecs', 'PredefinedTransistor', 'TransistorDatabase',
    'SimulationDefaults',

    # Configuration
    'AnalyzerInputs', 'ConfigManager',

    # Parameters
    'SimulationMode', 'SearchAlgorithm', 'ConductionModel',
    'ParameterValidationError', 'SimulationParameters', 'normalize_inputs',

    # History
    'HistoryEntry', 'RunHistory',
]
