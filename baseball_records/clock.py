"""
Insertion clock for leaderboard records.

Records on the same leaderboard may share an attempts value, so each one also
carries an epoch-millisecond insertion timestamp. Wall-clock ticks can repeat
(two submissions inside one millisecond, or a clock stepping backwards), so the
clock hands out `max(now, last + 1)` to keep timestamps strictly increasing.
"""

from __future__ import annotations

import time
from typing import Callable, Optional


def _wall_clock_ms() -> int:
    return time.time_ns() // 1_000_000


class InsertionClock:
    """
    Strictly increasing millisecond timestamps.

    Parameters
    ----------
    now_ms : callable, optional
        Source of wall-clock milliseconds. Defaults to `time.time_ns`.
    last : int
        Timestamp already handed out (or observed); the next one will exceed it.
    """

    def __init__(self, now_ms: Optional[Callable[[], int]] = None, last: int = 0) -> None:
        self._now_ms = now_ms or _wall_clock_ms
        self._last = last

    @property
    def last(self) -> int:
        return self._last

    def observe(self, timestamp: Optional[int]) -> None:
        """Advance past a timestamp seen elsewhere (e.g. in loaded records)."""
        if timestamp is not None and timestamp > self._last:
            self._last = timestamp

    def next(self) -> int:
        timestamp = max(self._now_ms(), self._last + 1)
        self._last = timestamp
        return timestamp


__all__ = ["InsertionClock"]
