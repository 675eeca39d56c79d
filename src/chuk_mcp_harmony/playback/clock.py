"""
Audio clocks - monotonically increasing time sources for the scheduler.

The scheduler only needs `now()` in seconds. Real audio backends expose
their own clock; these implementations cover wall-clock playback and
deterministic stepping.
"""

from __future__ import annotations

import time
from typing import Protocol


class AudioClock(Protocol):
    """A monotonically increasing clock, in seconds."""

    def now(self) -> float: ...


class MonotonicClock:
    """Wall clock based on time.monotonic, starting at 0 on creation."""

    def __init__(self) -> None:
        self._origin = time.monotonic()

    def now(self) -> float:
        return time.monotonic() - self._origin


class ManualClock:
    """
    A clock that only moves when advanced.

    Used for offline previews and tests, where the scheduler is driven
    step by step instead of by timers.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._time = start

    def now(self) -> float:
        return self._time

    def advance(self, seconds: float) -> float:
        """Move the clock forward and return the new time."""
        if seconds < 0:
            raise ValueError(f"Clock cannot run backwards ({seconds}s)")
        self._time += seconds
        return self._time
