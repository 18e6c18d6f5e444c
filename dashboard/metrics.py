"""
Lightweight runtime metrics for /health.

Uses in-process counters so it works without extra dependencies.
"""

from __future__ import annotations

import threading
import time
from collections import deque
from typing import Deque, Dict


class _RuntimeMetrics:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._requests_total = 0
        self._error_timestamps: Deque[float] = deque()

    def record_request(self) -> None:
        with self._lock:
            self._requests_total += 1

    def record_error(self, ts: float | None = None) -> None:
        now = ts if ts is not None else time.time()
        with self._lock:
            self._error_timestamps.append(now)
            self._prune_locked(now)

    def snapshot(self) -> Dict[str, int]:
        now = time.time()
        with self._lock:
            self._prune_locked(now)
            return {
                "requests_total": self._requests_total,
                "errors_last_hour": len(self._error_timestamps),
            }

    def reset_for_tests(self) -> None:
        with self._lock:
            self._requests_total = 0
            self._error_timestamps.clear()

    def _prune_locked(self, now: float) -> None:
        cutoff = now - 3600.0
        while self._error_timestamps and self._error_timestamps[0] < cutoff:
            self._error_timestamps.popleft()


_METRICS = _RuntimeMetrics()


def record_request() -> None:
    _METRICS.record_request()


def record_error(ts: float | None = None) -> None:
    _METRICS.record_error(ts)


def metrics_snapshot() -> Dict[str, int]:
    return _METRICS.snapshot()


def reset_metrics_for_tests() -> None:
    _METRICS.reset_for_tests()
