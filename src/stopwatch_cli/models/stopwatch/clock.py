"""Clock capability used by the stopwatch for elapsed-time accounting."""

import time
from typing import Protocol


class Clock(Protocol):
    """Anything that can report a monotonic instant in seconds."""

    def now(self) -> float: ...


class MonotonicClock:
    """Clock backed by ``time.monotonic`` (immune to wall-clock changes)."""

    def now(self) -> float:
        return time.monotonic()
