"""
Unit tests for the safety evaluator.
"""

import pytest

from ampere_analyzer.core.parameters import SimulationMode
from ampere_analyzer.solvers.loss_model import LossBreakdown
from ampere_analyzer.solvers.safety import (
    FailureReason,
    FTF_PRIORITY,
    SAFE_DETAILS,
    active_limits,
    check_current,
    evaluate_safety,
    tripped_limits,
)


def _losses(current=10.0, total=10.0, temperature=50.0):
    return LossBreakdown(current=current, conduction=total / 2, switching=total / 2,
                         total=total, junction_temperature=temperature)


class TestModes:
    """Test which limits each mode checks."""

    def test_temp_mode_ignores_budget(self, make_params):
        """Temperature mode passes a current that breaks the budget."""
        params = make_params(simulation_mode=SimulationMode.TEMP, effective_cooling_budget=1.0)
        verdict = check_current(params, 10.0)

        assert verdict.is_safe
        assert verdict.failure_reason is None
        assert verdict.details == SAFE_DETAILS

    def test_budget_mode_ignores_temperature(self, make_params):
        """Budget mode passes a current that overheats the junction."""
        params = make_params(simulation_mode=SimulationMode.BUDGET,
                             effective_cooling_budget=10000.0, max_temperature=30.0)
        assert check_current(params, 50.0).is_safe

    def test_temperature_failure(self, scenario_a):
        """Over-temperature reports the reached temperature."""
        verdict = check_current(scenario_a, 60.5)

        assert not verdict.is_safe
        assert verdict.failure_reason is FailureReason.JUNCTION_TEMPERATURE
        assert verdict.details == "Exceeded max junction temp of 150.0°C. Reached 151.08°C."
        assert verdict.final_temperature == pytest.approx(151.082)

    def test_budget_failure(self, scenario_b):
        """Over-budget reports the reached power."""
        verdict = check_current(scenario_b, 22.5)

        assert verdict.failure_reason is FailureReason.POWER_BUDGET
        assert verdict.details == "Exceeded cooling budget of 50.0W. Reached 50.06W."
        assert verdict.power_dissipation.total == pytest.approx(50.0625)

    def test_limit_is_strict(self, make_params):
        """Exactly reaching a limit is still safe."""
        params = make_params(simulation_mode=SimulationMode.FTF, effective_cooling_budget=50.0)
        losses = _losses(current=100.0, total=50.0, temperature=150.0)
        assert evaluate_safety(params, losses).is_safe


class TestFirstToFail:
    """Test first-to-fail priority."""

    def test_priority_order(self):
        """Temperature, then budget, then power rating, then current rating."""
        assert FTF_PRIORITY == (
            FailureReason.JUNCTION_TEMPERATURE,
            FailureReason.POWER_BUDGET,
            FailureReason.POWER_RATING,
            FailureReason.CURRENT_RATING,
        )
        assert active_limits(SimulationMode.FTF) == FTF_PRIORITY

    def test_temperature_wins_tie(self, make_params):
        """When temperature and budget trip together, temperature is reported."""
        params = make_params(simulation_mode=SimulationMode.FTF, effective_cooling_budget=50.0)
        losses = _losses(total=200.0, temperature=400.0)

        assert tripped_limits(params, losses) == [
            FailureReason.JUNCTION_TEMPERATURE, FailureReason.POWER_BUDGET,
        ]
        assert evaluate_safety(params, losses).failure_reason is FailureReason.JUNCTION_TEMPERATURE

    def test_budget_before_rating(self, make_params):
        """Budget outranks the device power rating."""
        params = make_params(simulation_mode=SimulationMode.FTF,
                             effective_cooling_budget=50.0, power_dissipation_rating=40.0)
        verdict = evaluate_safety(params, _losses(total=60.0, temperature=80.0))
        assert verdict.failure_reason is FailureReason.POWER_BUDGET

    def test_power_rating(self, make_params):
        """Power rating is checked in first-to-fail when given."""
        params = make_params(simulation_mode=SimulationMode.FTF, power_dissipation_rating=40.0)
        verdict = evaluate_safety(params, _losses(total=45.0, temperature=80.0))

        assert verdict.failure_reason is FailureReason.POWER_RATING
        assert "max power dissipation of 40.0W" in verdict.details

    def test_power_rating_unknown(self, make_params):
        """Without a power rating the check is skipped."""
        params = make_params(simulation_mode=SimulationMode.FTF)
        assert evaluate_safety(params, _losses(total=45.0, temperature=80.0)).is_safe

    def test_current_rating(self, make_params):
        """A current above the rating fails even with low losses."""
        params = make_params(simulation_mode=SimulationMode.FTF)
        verdict = evaluate_safety(params, _losses(current=150.0, total=1.0, temperature=30.0))

        assert verdict.failure_reason is FailureReason.CURRENT_RATING
        assert verdict.details == "Exceeded max current rating of 100.00A."

    def test_labels(self):
        """Short labels used in summaries."""
        assert FailureReason.JUNCTION_TEMPERATURE.label == "Thermal"
        assert FailureReason.POWER_BUDGET.label == "Cooling Budget"
        assert FailureReason.POWER_RATING.label == "Power Dissipation"
        assert FailureReason.CURRENT_RATING.label == "Current"
