"""
Ampere Analyzer - Simulation Runner
===================================
Executes one search on a background worker thread.

Points stream into a PointChannel while the search runs; the final
SimulationResult is delivered once, after the channel is closed. A crash in
the worker surfaces to the caller as SimulationTransportError.

Author: Ampere Analyzer Tool
Version: 1.0.0
"""

import threading
import uuid
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from ..core.parameters import SimulationParameters
from ..utils.logger import format_error_report, get_logger
from .current_search import CurrentSearchEngine, LiveDataPoint, SimulationResult
from .streaming import PointChannel


class SimulationTransportError(RuntimeError):
    """The worker context failed before delivering a result."""


@dataclass
class SimulationRun:
    """Every streamed point plus the final result of one run."""
    points: List[LiveDataPoint] = field(default_factory=list)
    result: Optional[SimulationResult] = None

    def to_dict(self):
        return {
            'points': [p.to_dict() for p in self.points],
            'result': self.result.to_dict() if self.result else None,
        }


class SimulationRunner:
    """
    One-shot background execution of a CurrentSearchEngine.

    Usage:
        runner = SimulationRunner(params).start()
        for point in runner.points():
            ...
        result = runner.result()
    """

    def __init__(self, params: SimulationParameters, engine: Optional[CurrentSearchEngine] = None):
        self.params = params
        self.engine = engine or CurrentSearchEngine(params)
        self.channel = PointChannel()
        self.logger = get_logger()
        self.name = f"ampere-run-{uuid.uuid4().hex[:8]}"

        self._thread: Optional[threading.Thread] = None
        self._result: Optional[SimulationResult] = None
        self._error: Optional[BaseException] = None
        self._done = threading.Event()

    def start(self) -> 'SimulationRunner':
        """Start the worker thread. A runner can only be started once."""
        if self._thread is not None:
            raise RuntimeError("Simulation runner already started")
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()
        return self

    def _run(self):
        try:
            self._result = self.engine.run(self.channel)
        except Exception as e:
            self.logger.exception(f"Simulation worker {self.name} failed: {e}")
            self.logger.debug(format_error_report(e, {'run': self.name, **self.params.to_dict()}))
            self._error = e
        finally:
            self.channel.close()
            self._done.set()

    @property
    def started(self) -> bool:
        return self._thread is not None

    @property
    def done(self) -> bool:
        return self._done.is_set()

    def points(self) -> Iterator[LiveDataPoint]:
        """Iterate streamed points until the run finishes."""
        return iter(self.channel)

    def result(self, timeout: Optional[float] = None) -> SimulationResult:
        """
        Wait for the final result.

        Raises:
            TimeoutError: if the run does not finish within timeout
            SimulationTransportError: if the worker failed
        """
        if self._thread is None:
            raise RuntimeError("Simulation runner has not been started")
        if not self._done.wait(timeout):
            raise TimeoutError(f"Simulation {self.name} still running after {timeout}s")
        if self._error is not None:
            raise SimulationTransportError(
                f"Simulation {self.name} failed: {self._error}"
            ) from self._error
        return self._result


def run_simulation(params: SimulationParameters) -> SimulationRun:
    """Run a search to completion on a worker thread and collect its output."""
    runner = SimulationRunner(params).start()
    points = list(runner.points())
    return SimulationRun(points=points, result=runner.result())


__all__ = [
    'SimulationTransportError',
    'SimulationRun',
    'SimulationRunner',
    'run_simulation',
]
