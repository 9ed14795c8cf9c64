"""
Thread‑safe statistics aggregator.

Outcomes arrive from up to *C* worker threads in no particular order. The
counters, the duration sum and the min/max extremes are all updated inside a
single lock, so a read‑compare‑write on the extremes can never interleave with
another reporter.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from typing import Optional

from http_stress.model import RequestOutcome, Results

logger = logging.getLogger(__name__)


@dataclass
class RunStats:
    total_requests: int = 0
    success_requests: int = 0
    failed_requests: int = 0
    duration_sum: float = 0.0
    min_duration: Optional[float] = None
    max_duration: Optional[float] = None


class StatsAggregator:
    """Accumulates outcomes for exactly one run."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._stats = RunStats()

    def record(self, outcome: RequestOutcome) -> None:
        d = outcome.duration
        with self._lock:
            s = self._stats
            s.total_requests += 1
            if outcome.success:
                s.success_requests += 1
            else:
                s.failed_requests += 1
            s.duration_sum += d
            if s.min_duration is None or d < s.min_duration:
                s.min_duration = d
            if s.max_duration is None or d > s.max_duration:
                s.max_duration = d

    def snapshot(self) -> RunStats:
        """Consistent copy of the running totals."""
        with self._lock:
            return replace(self._stats)

    def finalize(self, total_time: float) -> Results:
        """Freeze the totals into :class:`Results`; call after the barrier."""
        s = self.snapshot()
        lo = s.min_duration or 0.0
        hi = s.max_duration or 0.0
        avg = s.duration_sum / s.total_requests if s.total_requests else 0.0
        avg = min(max(avg, lo), hi)  # float rounding of the sum
        results = Results(
            total_requests=s.total_requests,
            success_requests=s.success_requests,
            failed_requests=s.failed_requests,
            total_time=total_time,
            average_duration=avg,
            min_duration=lo,
            max_duration=hi,
        )
        logger.debug("finalized %r", results)
        return results
