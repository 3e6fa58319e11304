"""
Ampere Analyzer - Live Sample Streaming
=======================================
Decouples the rate at which a run produces samples from the rate at which a
consumer draws them.

The producer writes into an unbounded PointChannel and never waits. A consumer
drains it on its own cadence, typically through LiveSeriesWindow.tick() from a
periodic render timer.

Author: Ampere Analyzer Tool
Version: 1.0.0
"""

import queue
import threading
from typing import Any, Iterator, List, Optional

from ..core.constants import SimulationDefaults
from ..core.parameters import SearchAlgorithm

_CLOSED = object()


class CollectingSink:
    """Sink that keeps every point in production order."""

    def __init__(self):
        self.points: List[Any] = []

    def put(self, point: Any):
        self.points.append(point)


class PointChannel:
    """Unbounded single-producer, single-consumer channel."""

    def __init__(self):
        self._queue = queue.SimpleQueue()
        self._closed = threading.Event()
        self._exhausted = False

    def put(self, point: Any):
        """Enqueue a point; never blocks."""
        if self._closed.is_set():
            raise RuntimeError("Cannot put into a closed channel")
        self._queue.put(point)

    def close(self):
        """Mark the end of the stream."""
        if not self._closed.is_set():
            self._closed.set()
            self._queue.put(_CLOSED)

    @property
    def closed(self) -> bool:
        """True once the producer has finished."""
        return self._closed.is_set()

    @property
    def exhausted(self) -> bool:
        """True once the consumer has read past the last point."""
        return self._exhausted

    def get(self, timeout: Optional[float] = None) -> Any:
        """
        Block for the next point.

        Raises:
            queue.Empty: on timeout
            StopIteration: when the stream has ended
        """
        if self._exhausted:
            raise StopIteration
        item = self._queue.get(timeout=timeout)
        if item is _CLOSED:
            self._exhausted = True
            raise StopIteration
        return item

    def drain(self, max_items: Optional[int] = None) -> List[Any]:
        """Take up to max_items points that are already available, without waiting."""
        items = []
        while not self._exhausted and (max_items is None or len(items) < max_items):
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                break
            if item is _CLOSED:
                self._exhausted = True
                break
            items.append(item)
        return items

    def __iter__(self) -> Iterator[Any]:
        while True:
            try:
                yield self.get()
            except StopIteration:
                return


class LiveSeriesWindow:
    """
    Rolling window of the most recent points for a live chart.

    Each tick takes a small batch from the channel: several points for
    iterative sweeps, one at a time for bisection so each probe is visible.
    Bisection points arrive out of current order and are kept sorted.
    """

    def __init__(self, algorithm: SearchAlgorithm,
                 max_points: int = SimulationDefaults.LIVE_WINDOW_POINTS,
                 batch_size: Optional[int] = None):
        self.algorithm = algorithm
        self.max_points = max_points
        if batch_size is None:
            batch_size = (SimulationDefaults.LIVE_BATCH_BINARY
                          if algorithm is SearchAlgorithm.BINARY
                          else SimulationDefaults.LIVE_BATCH_ITERATIVE)
        self.batch_size = batch_size
        self._points: List[Any] = []

    @property
    def points(self) -> List[Any]:
        return list(self._points)

    @property
    def latest(self) -> Optional[Any]:
        return self._points[-1] if self._points else None

    def _extend(self, new_points: List[Any]):
        if not new_points:
            return
        updated = self._points + new_points
        if self.algorithm is SearchAlgorithm.BINARY:
            updated.sort(key=lambda p: p.current)
        self._points = updated[-self.max_points:]

    def tick(self, channel: PointChannel) -> List[Any]:
        """Pull one batch from the channel; returns the points taken."""
        new_points = channel.drain(self.batch_size)
        self._extend(new_points)
        return new_points

    def flush(self, channel: PointChannel) -> List[Any]:
        """Pull everything currently queued."""
        remaining = channel.drain()
        self._extend(remaining)
        return remaining

    def clear(self):
        self._points = []


__all__ = [
    'CollectingSink',
    'PointChannel',
    'LiveSeriesWindow',
]
