"""Stopwatch - timer state machine, refresh loop and display."""

from .clock import Clock, MonotonicClock
from .exceptions import ConfigError, StopwatchError
from .refresh import RefreshLoop
from .state import (
    DEFAULT_INTERVAL,
    MAX_INTERVAL,
    MIN_INTERVAL,
    Lap,
    OperationResult,
    RenderedFrame,
    TimerState,
    TimerStatus,
)
from .stopwatch import Stopwatch
from .ui import StopwatchDisplay

__all__ = [
    "Clock",
    "ConfigError",
    "DEFAULT_INTERVAL",
    "Lap",
    "MAX_INTERVAL",
    "MIN_INTERVAL",
    "MonotonicClock",
    "OperationResult",
    "RefreshLoop",
    "RenderedFrame",
    "Stopwatch",
    "StopwatchDisplay",
    "StopwatchError",
    "TimerState",
    "TimerStatus",
]
