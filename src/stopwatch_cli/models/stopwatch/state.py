"""Stopwatch state and the value types returned by its operations."""

from dataclasses import dataclass, field
from typing import Literal

TimerStatus = Literal["stopped", "running", "paused"]
ErrorKind = Literal["invalid_transition", "invalid_parameter", "config_error"]

MIN_INTERVAL = 0.1
MAX_INTERVAL = 60.0
DEFAULT_INTERVAL = 1.0


def is_valid_interval(seconds: float) -> bool:
    """Check that a display interval lies within [MIN_INTERVAL, MAX_INTERVAL]."""
    return MIN_INTERVAL <= seconds <= MAX_INTERVAL


@dataclass
class TimerState:
    """Elapsed-time accounting for a single stopwatch."""

    accumulated_elapsed: float = 0.0
    segment_start: float | None = None  # monotonic seconds, set while running
    status: TimerStatus = "stopped"
    display_interval: float = DEFAULT_INTERVAL
    laps: list[float] = field(default_factory=list)

    @property
    def is_running(self) -> bool:
        return self.status == "running"

    def total_elapsed(self, now: float) -> float:
        """Total elapsed seconds at instant *now* (running segment included)."""
        if self.is_running and self.segment_start is not None:
            return self.accumulated_elapsed + (now - self.segment_start)
        return self.accumulated_elapsed

    def begin_segment(self, now: float) -> None:
        self.segment_start = now
        self.status = "running"

    def fold_segment(self, now: float) -> None:
        """Add the current running segment to the accumulated total."""
        if self.segment_start is not None:
            self.accumulated_elapsed += now - self.segment_start
        self.segment_start = None

    def clear(self) -> None:
        self.accumulated_elapsed = 0.0
        self.segment_start = None
        self.status = "stopped"
        self.laps.clear()


@dataclass(frozen=True)
class Lap:
    """A snapshot of total elapsed time, numbered from 1."""

    index: int
    elapsed: float


@dataclass(frozen=True)
class RenderedFrame:
    """One rendering of the stopwatch: time text plus progress bar."""

    elapsed: float
    status: TimerStatus
    time_text: str
    progress: int
    bar_text: str

    @property
    def status_label(self) -> str:
        return self.status.capitalize()

    def __str__(self) -> str:
        return f"Elapsed time: {self.time_text} ({self.status_label})\n{self.bar_text}"


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a stopwatch operation.

    Failures never raise: ``ok`` is False and ``error`` names the kind of
    failure. A declined reset is ``ok`` with no state change.
    """

    ok: bool
    message: str
    error: ErrorKind | None = None
    frame: RenderedFrame | None = None
    lap: Lap | None = None

    @classmethod
    def success(cls, message: str, **kwargs) -> "OperationResult":
        return cls(ok=True, message=message, **kwargs)

    @classmethod
    def failure(cls, message: str, error: ErrorKind) -> "OperationResult":
        return cls(ok=False, message=message, error=error)
