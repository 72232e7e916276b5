"""Metric storage capability and its thread-safe in-memory implementation."""

from __future__ import annotations

import threading
from typing import Dict, Protocol, runtime_checkable

from app.metrics.schemas import MetricsSnapshot

_INT64_MIN = -(2**63)
_INT64_SPAN = 2**64


def wrap_int64(value: int) -> int:
    """Reduce ``value`` to the signed 64-bit range using two's-complement wrap."""

    return (value - _INT64_MIN) % _INT64_SPAN + _INT64_MIN


@runtime_checkable
class MetricStorage(Protocol):
    """Backend able to apply gauge and counter updates.

    Implementations raise :class:`app.metrics.errors.StorageError` when an
    update cannot be committed.
    """

    def update_gauge(self, name: str, value: float) -> None: ...

    def update_counter(self, name: str, delta: int) -> None: ...


class MemStorage:
    """Keeps gauges and counters in process memory behind a single lock."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._gauges: Dict[str, float] = {}
        self._counters: Dict[str, int] = {}

    def update_gauge(self, name: str, value: float) -> None:
        with self._lock:
            self._gauges[name] = value

    def update_counter(self, name: str, delta: int) -> None:
        with self._lock:
            self._counters[name] = wrap_int64(self._counters.get(name, 0) + delta)

    def gauge(self, name: str) -> float | None:
        with self._lock:
            return self._gauges.get(name)

    def counter(self, name: str) -> int | None:
        with self._lock:
            return self._counters.get(name)

    def snapshot(self) -> MetricsSnapshot:
        with self._lock:
            return MetricsSnapshot(gauges=dict(self._gauges), counters=dict(self._counters))

    def reset(self) -> None:
        """Drop every stored metric (testing utility)."""

        with self._lock:
            self._gauges.clear()
            self._counters.clear()
