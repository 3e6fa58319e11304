"""
Ampere Analyzer
===============
Maximum safe current analysis for power transistors.

Features:
- Conduction and switching loss model for MOSFET, GaN, BJT and IGBT devices
- Temperature, cooling budget and first-to-fail limit modes
- Iterative sweep and bisection search with live sample streaming
- Cooling profile catalog and predefined transistor database
- Analytical cross-check of the limit current

Usage:
    from ampere_analyzer import AnalyzerInputs, normalize_inputs, run_simulation

    inputs = AnalyzerInputs.from_predefined('irfz44n', simulation_mode='temp')
    run = run_simulation(normalize_inputs(inputs))
    print(run.result.max_safe_current)

Author: Ampere Analyzer Tool
Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"

from .core import (
    AnalyzerInputs, ConfigManager, CoolingProfileCatalog, TransistorDatabase,
    SimulationMode, SearchAlgorithm, ParameterValidationError,
    SimulationParameters, normalize_inputs, RunHistory
)

from .solvers import (
    CurrentSearchEngine, SimulationResult, LiveDataPoint,
    SimulationRunner, SimulationTransportError, run_simulation,
    compute_expected_limits, summarize_result
)

__all__ = [
    '__version__',
    'AnalyzerInputs', 'ConfigManager', 'CoolingProfileCatalog', 'TransistorDatabase',
    'SimulationMode', 'SearchAlgorithm', 'ParameterValidationError',
    'SimulationParameters', 'normalize_inputs', 'RunHistory',
    'CurrentSearchEngine', 'SimulationResult', 'LiveDataPoint',
    'SimulationRunner', 'SimulationTransportError', 'run_simulation',
    'compute_expected_limits', 'summarize_result',
]
