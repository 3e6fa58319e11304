"""
Ampere Analyzer - Follow-up Runs
================================
Helpers for "what if" questions about a completed run: a plain-text summary
of the outcome, derived inputs with a few fields changed, and a sweep over
every cooling profile.

Each follow-up is a new, independent run; nothing is shared with the run it
was derived from.

Author: Ampere Analyzer Tool
Version: 1.0.0
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, fields, replace
from typing import Dict, List, Optional, Any

from ..core.config import AnalyzerInputs
from ..core.constants import CoolingProfile, CoolingProfileCatalog
from ..core.parameters import normalize_inputs
from ..utils.logger import get_logger, log_function, log_section
from .current_search import SimulationResult
from .runner import SimulationRun, run_simulation


def summarize_result(result: SimulationResult) -> str:
    """One-line outcome summary suitable for an advisory prompt."""
    reason = result.failure_reason.label if result.failure_reason else "None"
    return (f"Result: {result.status.value}. "
            f"Failure Reason: {reason}. "
            f"Details: {result.details}")


def derive_inputs(inputs: AnalyzerInputs, **overrides) -> AnalyzerInputs:
    """
    Copy inputs with some fields replaced.

    Raises:
        KeyError: if an override names an unknown input field
    """
    allowed = {f.name for f in fields(AnalyzerInputs)}
    unknown = sorted(set(overrides) - allowed)
    if unknown:
        raise KeyError(f"Unknown input fields: {', '.join(unknown)}")
    return replace(inputs, **overrides)


@log_function()
def run_follow_up(inputs: AnalyzerInputs,
                  overrides: Optional[Dict[str, Any]] = None,
                  catalog: Optional[CoolingProfileCatalog] = None) -> SimulationRun:
    """Run an independent simulation on inputs derived from a previous run."""
    derived = derive_inputs(inputs, **(overrides or {}))
    get_logger().info(f"Follow-up run for {derived.display_name}: {overrides or {}}")
    return run_simulation(normalize_inputs(derived, catalog))


@dataclass(frozen=True)
class CoolingComparison:
    """Result of running the same device on one cooling profile."""
    profile: CoolingProfile
    result: SimulationResult

    def to_dict(self) -> Dict[str, Any]:
        return {
            'profile': self.profile.to_dict(),
            'result': self.result.to_dict(),
        }


def compare_cooling_profiles(inputs: AnalyzerInputs,
                             catalog: Optional[CoolingProfileCatalog] = None,
                             max_workers: Optional[int] = None) -> List[CoolingComparison]:
    """
    Run the inputs once per cooling profile, concurrently.

    Returns:
        Comparisons sorted by max safe current, best first
    """
    catalog = catalog if catalog is not None else CoolingProfileCatalog()
    profiles = list(catalog)

    def _run(profile: CoolingProfile) -> CoolingComparison:
        run = run_follow_up(inputs, {'cooling_profile_id': profile.id}, catalog)
        return CoolingComparison(profile=profile, result=run.result)

    with log_section(f"Cooling comparison ({len(profiles)} profiles)"):
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            comparisons = list(executor.map(_run, profiles))

    comparisons.sort(key=lambda c: c.result.max_safe_current, reverse=True)
    return comparisons


__all__ = [
    'summarize_result',
    'derive_inputs',
    'run_follow_up',
    'CoolingComparison',
    'compare_cooling_profiles',
]
