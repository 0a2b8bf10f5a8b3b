"""Time source shared by the task store and the query engine."""

from __future__ import annotations

import time
from collections.abc import Callable

# Returns the current time as whole epoch seconds.
Clock = Callable[[], int]


def system_clock() -> int:
    """Wall-clock time in epoch seconds."""
    return int(time.time())


class FixedClock:
    """Manually driven clock, handy for scripted sessions and tests.

    Example:
        clock = FixedClock(1_700_000_000)
        store = TaskStore(repo, clock=clock)
        clock.advance(60)
    """

    def __init__(self, now: int = 1):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> int:
        self.now += seconds
        return self.now
