"""
Ampere Analyzer - Run History
=============================
Opaque (parameters, result) records of completed runs, newest first.
"""

import threading
import uuid
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List

from .constants import SimulationDefaults


@dataclass
class HistoryEntry:
    """One completed run."""
    entry_id: str
    component_name: str
    timestamp: str
    parameters: Dict[str, Any] = field(default_factory=dict)
    result: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(cls, component_name: str, parameters, result) -> 'HistoryEntry':
        """Snapshot anything exposing to_dict(); the contents are not interpreted."""
        return cls(
            entry_id=uuid.uuid4().hex,
            component_name=component_name or "N/A",
            timestamp=datetime.now().isoformat(),
            parameters=parameters.to_dict(),
            result=result.to_dict(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.entry_id,
            'component_name': self.component_name,
            'timestamp': self.timestamp,
            'parameters': dict(self.parameters),
            'result': dict(self.result),
        }


class RunHistory:
    """Bounded in-memory history, newest entry first."""

    def __init__(self, limit: int = SimulationDefaults.HISTORY_LIMIT):
        self._entries = deque(maxlen=limit)
        self._lock = threading.Lock()

    def add(self, entry: HistoryEntry) -> HistoryEntry:
        with self._lock:
            self._entries.appendleft(entry)
        return entry

    def record(self, component_name: str, parameters, result) -> HistoryEntry:
        return self.add(HistoryEntry.create(component_name, parameters, result))

    def entries(self) -> List[HistoryEntry]:
        with self._lock:
            return list(self._entries)

    def clear(self):
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ['HistoryEntry', 'RunHistory']
