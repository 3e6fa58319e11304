"""
Test configuration for pytest.

Reference device used throughout: Rds(on) = 10 mΩ, 400 V, 50/50 ns at
100 kHz, Rth_jc = 0.5 °C/W on a 0.3 °C/W cooler, 25 °C ambient. Its losses
are P_cond = 0.01·I² W and P_sw = 2·I W, so T_j = 25 + 0.8·(0.01·I² + 2·I).
"""

import logging
import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from ampere_analyzer.core.config import AnalyzerInputs
from ampere_analyzer.core.constants import CoolingProfile, CoolingProfileCatalog
from ampere_analyzer.core.parameters import (
    ConductionModel, SearchAlgorithm, SimulationMode, SimulationParameters,
)
from ampere_analyzer.utils.logger import initialize_logger


@pytest.fixture(scope="session", autouse=True)
def session_logger():
    """Console-only logger bound to the session-wide stderr."""
    return initialize_logger(console_level=logging.WARNING, enable_file_logging=False)


def build_params(**overrides) -> SimulationParameters:
    values = dict(
        conduction=ConductionModel.resistive(0.01),
        max_current=100.0,
        max_voltage=400.0,
        rise_time_s=50e-9,
        fall_time_s=50e-9,
        switching_frequency_hz=100e3,
        rth_jc=0.5,
        cooling_thermal_resistance=0.3,
        max_temperature=150.0,
        ambient_temperature=25.0,
        simulation_mode=SimulationMode.TEMP,
        effective_cooling_budget=1000.0,
        algorithm=SearchAlgorithm.ITERATIVE,
        precision_steps=200,
    )
    values.update(overrides)
    return SimulationParameters(**values)


@pytest.fixture
def make_params():
    """Factory for reference-device parameters with overrides."""
    return build_params


@pytest.fixture
def scenario_a():
    """Temperature-limited: limit falls between 60.0 A and 60.5 A."""
    return build_params()


@pytest.fixture
def scenario_b():
    """Budget-limited at 50 W: limit falls between 22.0 A and 22.5 A."""
    return build_params(simulation_mode=SimulationMode.BUDGET, effective_cooling_budget=50.0)


@pytest.fixture
def scenario_c():
    """Safe over the whole range: T_j(100 A) = 265 °C."""
    return build_params(max_temperature=300.0)


@pytest.fixture
def scenario_d():
    """Unsafe at the first sample: T_j(0.5 A) ≈ 25.8 °C."""
    return build_params(max_temperature=25.5)


@pytest.fixture
def test_catalog():
    """Small cooling catalog including the reference cooler."""
    return CoolingProfileCatalog([
        CoolingProfile('reference', 'Reference Cooler', 0.3, 50.0),
        CoolingProfile('weak', 'Weak Heatsink', 2.0, 20.0),
        CoolingProfile('strong', 'Cold Plate', 0.05, 500.0),
    ])


@pytest.fixture
def reference_inputs():
    """Reference device as raw analyzer inputs (mΩ, ns, kHz)."""
    return AnalyzerInputs(
        component_name='Reference FET',
        transistor_type='MOSFET (N-Channel)',
        max_current=100.0,
        max_voltage=400.0,
        rds_on_mohm=10.0,
        rise_time_ns=50.0,
        fall_time_ns=50.0,
        rth_jc=0.5,
        max_temperature=150.0,
        switching_frequency_khz=100.0,
        ambient_temperature=25.0,
        cooling_profile_id='reference',
        simulation_mode='temp',
        simulation_algorithm='iterative',
        precision_steps=200,
    )
