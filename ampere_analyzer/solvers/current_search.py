"""
Ampere Analyzer - Current Search Engine
=======================================
Finds the largest current a device sustains without tripping the run's limits.

Supports:
- Iterative sweep over precision_steps equal increments of (0, max_current]
- Bisection between 0 and max_current down to max_current / precision_steps

Both algorithms share the same resolution, so their results agree to within
one step. Every evaluated current is pushed to an optional sink as a
LiveDataPoint; the SimulationResult is returned once the search has stopped.

Author: Ampere Analyzer Tool
Version: 1.0.0
"""

import math
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Protocol

import numpy as np

from ..core.constants import SimulationDefaults
from ..core.parameters import SearchAlgorithm, SimulationMode, SimulationParameters
from ..utils.logger import get_logger, timed_function
from .safety import FailureReason, PowerDissipation, SafetyVerdict, check_current


class PointSink(Protocol):
    """Anything that accepts streamed points."""

    def put(self, point: 'LiveDataPoint') -> None:
        ...


class RunStatus(Enum):
    """Outcome of a completed search."""
    SAFE = "safe"
    FAILED = "failed"


@dataclass(frozen=True)
class LiveDataPoint:
    """One evaluated current, as streamed to live consumers."""
    current: float  # A
    temperature: float  # °C
    power_loss: float  # W
    conduction_loss: float  # W
    switching_loss: float  # W
    progress: float  # 0-100
    limit_value: float

    def to_dict(self) -> Dict[str, float]:
        return {
            'current': self.current,
            'temperature': self.temperature,
            'power_loss': self.power_loss,
            'conduction_loss': self.conduction_loss,
            'switching_loss': self.switching_loss,
            'progress': self.progress,
            'limit_value': self.limit_value,
        }


@dataclass(frozen=True)
class SimulationResult:
    """Verdict of one run."""
    status: RunStatus
    max_safe_current: float  # A
    failure_reason: Optional[FailureReason]
    details: str
    final_temperature: float  # °C
    power_dissipation: PowerDissipation
    algorithm: SearchAlgorithm
    samples_evaluated: int
    bracket_width: float  # A, width of the interval known to hold the limit

    @property
    def is_safe(self) -> bool:
        return self.status is RunStatus.SAFE

    def to_dict(self) -> Dict[str, Any]:
        return {
            'status': self.status.value,
            'max_safe_current': self.max_safe_current,
            'failure_reason': self.failure_reason.value if self.failure_reason else None,
            'details': self.details,
            'final_temperature': self.final_temperature,
            'power_dissipation': self.power_dissipation.to_dict(),
            'algorithm': self.algorithm.value,
            'samples_evaluated': self.samples_evaluated,
            'bracket_width': self.bracket_width,
        }


def bisection_iteration_cap(precision_steps: int) -> int:
    """Maximum bisection probes: ceil(log2(max_current / tolerance)) plus a margin."""
    return math.ceil(math.log2(precision_steps)) + SimulationDefaults.BISECTION_EXTRA_ITERATIONS


class CurrentSearchEngine:
    """
    Search driver for a single parameter set.

    The engine holds nothing but its immutable parameters, so one instance
    can be run repeatedly or from several threads.
    """

    def __init__(self, params: SimulationParameters):
        self.params = params
        self.logger = get_logger()

    @property
    def limit_value(self) -> float:
        """Reference limit plotted alongside the live series."""
        mode = self.params.simulation_mode
        if mode is SimulationMode.TEMP:
            return self.params.max_temperature
        if mode is SimulationMode.BUDGET:
            return self.params.effective_cooling_budget
        return SimulationDefaults.FTF_LIMIT_VALUE

    def _emit(self, sink: Optional[PointSink], verdict: SafetyVerdict, progress: float):
        self.logger.log_sample(verdict.current, verdict.final_temperature,
                               verdict.power_dissipation.total, verdict.is_safe)
        if sink is None:
            return
        power = verdict.power_dissipation
        sink.put(LiveDataPoint(
            current=verdict.current,
            temperature=verdict.final_temperature,
            power_loss=power.total,
            conduction_loss=power.conduction,
            switching_loss=power.switching,
            progress=min(100.0, progress),
            limit_value=self.limit_value,
        ))

    def _safe_result(self, verdict: SafetyVerdict, samples: int) -> SimulationResult:
        return SimulationResult(
            status=RunStatus.SAFE,
            max_safe_current=self.params.max_current,
            failure_reason=None,
            details=f"Device operates safely up to {self.params.max_current:.2f}A within all limits.",
            final_temperature=verdict.final_temperature,
            power_dissipation=verdict.power_dissipation,
            algorithm=self.params.algorithm,
            samples_evaluated=samples,
            bracket_width=0.0,
        )

    def _failed_result(self, max_safe_current: float, failing: SafetyVerdict,
                       samples: int) -> SimulationResult:
        return SimulationResult(
            status=RunStatus.FAILED,
            max_safe_current=max_safe_current,
            failure_reason=failing.failure_reason,
            details=failing.details,
            final_temperature=failing.final_temperature,
            power_dissipation=failing.power_dissipation,
            algorithm=self.params.algorithm,
            samples_evaluated=samples,
            bracket_width=failing.current - max_safe_current,
        )

    @timed_function("search_iterative")
    def run_iterative(self, sink: Optional[PointSink] = None) -> SimulationResult:
        """
        Linear sweep in strictly increasing current.

        Stops at the first unsafe sample; the last safe sample is the answer.
        """
        steps = self.params.precision_steps
        currents = np.linspace(0.0, self.params.max_current, steps + 1)[1:]

        last_safe = 0.0
        verdict = None
        for index, current in enumerate(currents, start=1):
            verdict = check_current(self.params, float(current))
            self._emit(sink, verdict, index / steps * 100.0)

            if not verdict.is_safe:
                self.logger.info(f"Limit reached at {verdict.current:.3f}A: {verdict.failure_reason.label}")
                return self._failed_result(last_safe, verdict, index)

            last_safe = verdict.current

        return self._safe_result(verdict, steps)

    @timed_function("search_binary")
    def run_binary_search(self, sink: Optional[PointSink] = None) -> SimulationResult:
        """
        Bisection between 0 (assumed safe) and max_current.

        The upper bound is probed first: if it is safe the whole range is.
        Points are emitted in probe order, not current order.
        """
        tolerance = self.params.tolerance
        max_iterations = bisection_iteration_cap(self.params.precision_steps)
        total_probes = max_iterations + 1

        top = check_current(self.params, self.params.max_current)
        self._emit(sink, top, 1 / total_probes * 100.0)
        if top.is_safe:
            return self._safe_result(top, 1)

        low, high = 0.0, self.params.max_current
        last_unsafe = top
        probes = 1

        for iteration in range(max_iterations):
            if high - low <= tolerance:
                break

            mid = 0.5 * (low + high)
            verdict = check_current(self.params, mid)
            probes += 1
            self._emit(sink, verdict, probes / total_probes * 100.0)

            if verdict.is_safe:
                low = mid
            else:
                high = mid
                last_unsafe = verdict
            self.logger.log_bracket(iteration, low, high, tolerance)

        if high - low > tolerance:
            self.logger.warning(f"Bisection stopped at iteration cap with bracket {high - low:.6f}A")

        self.logger.info(f"Bisection converged to {low:.3f}A after {probes} probes")
        return self._failed_result(low, last_unsafe, probes)

    def run(self, sink: Optional[PointSink] = None) -> SimulationResult:
        """Run the configured algorithm, streaming points into sink."""
        run_id = f"{self.params.algorithm.value}-{uuid.uuid4().hex[:8]}"
        started = self.logger.log_run_start(run_id, self.params.to_dict())

        if self.params.algorithm is SearchAlgorithm.BINARY:
            result = self.run_binary_search(sink)
        else:
            result = self.run_iterative(sink)

        self.logger.log_run_end(run_id, started, result.status.value, result.details)
        return result


__all__ = [
    'PointSink',
    'RunStatus',
    'LiveDataPoint',
    'SimulationResult',
    'bisection_iteration_cap',
    'CurrentSearchEngine',
]
