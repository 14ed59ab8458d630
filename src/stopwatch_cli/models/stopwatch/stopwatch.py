"""The stopwatch state machine and its refresh loop lifecycle.

Every public operation takes the same lock for its whole critical section,
and so does each refresh cycle. Operations that end a running segment
(pause, stop, reset) signal the refresh loop while holding the lock and
join it after releasing it, before returning. A cycle that was waiting for
the lock therefore sees the new status and skips its render, and no frame
from a running snapshot can be emitted once those operations return.
"""

import threading
from collections.abc import Callable
from typing import Protocol

from stopwatch_cli.utils.logger import get_logger

from .clock import Clock, MonotonicClock
from .exceptions import ConfigError
from .formatting import format_elapsed, format_progress_bar, progress_position
from .refresh import RefreshFactory, RefreshHandle, RefreshLoop
from .state import (
    DEFAULT_INTERVAL,
    MAX_INTERVAL,
    MIN_INTERVAL,
    Lap,
    OperationResult,
    RenderedFrame,
    TimerState,
    TimerStatus,
    is_valid_interval,
)

RenderSink = Callable[[RenderedFrame], None]


class ConfigStore(Protocol):
    """Persistence for the display interval."""

    def load_display_interval(self) -> float: ...

    def save_display_interval(self, seconds: float) -> None: ...


class Stopwatch:
    """A single stopwatch with laps and a background display refresh."""

    def __init__(
        self,
        clock: Clock | None = None,
        config_store: ConfigStore | None = None,
        on_render: RenderSink | None = None,
        refresh_factory: RefreshFactory = RefreshLoop,
    ):
        self._clock = clock or MonotonicClock()
        self._config_store = config_store
        self._on_render = on_render
        self._refresh_factory = refresh_factory
        self._refresh: RefreshHandle | None = None
        self._lock = threading.Lock()
        self._state = TimerState()
        self._logger = get_logger()

        # Set when the persisted interval could not be used.
        self.config_warning: str | None = None
        if config_store is not None:
            self._load_interval()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def status(self) -> TimerStatus:
        with self._lock:
            return self._state.status

    @property
    def display_interval(self) -> float:
        with self._lock:
            return self._state.display_interval

    def elapsed(self) -> float:
        """Total elapsed seconds right now."""
        with self._lock:
            return self._state.total_elapsed(self._clock.now())

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start(self) -> OperationResult:
        """Start from stopped, or resume from paused."""
        if self.status == "running":
            return OperationResult.failure(
                "Stopwatch is already running.", "invalid_transition"
            )
        # A leftover loop is joined before a new one may exist.
        self._halt_refresh()

        with self._lock:
            if self._state.is_running:
                return OperationResult.failure(
                    "Stopwatch is already running.", "invalid_transition"
                )
            resuming = self._state.status == "paused"
            self._state.begin_segment(self._clock.now())
            self._refresh = self._refresh_factory(
                self._refresh_tick, self._current_interval
            )
            self._refresh.start()
            elapsed = self._state.accumulated_elapsed

        if resuming:
            self._logger.info("stopwatch resumed at %.2fs", elapsed)
            return OperationResult.success("Stopwatch resumed.")
        self._logger.info("stopwatch started at %.2fs", elapsed)
        return OperationResult.success("Stopwatch started.")

    def pause(self) -> OperationResult:
        """Freeze elapsed time and stop refreshing until the next start."""
        with self._lock:
            if self._state.status == "paused":
                return OperationResult.failure(
                    "Stopwatch is already paused.", "invalid_transition"
                )
            if not self._state.is_running:
                return OperationResult.failure(
                    "Stopwatch is not running.", "invalid_transition"
                )
            self._state.fold_segment(self._clock.now())
            self._state.status = "paused"
            handle = self._detach_refresh()
            frame = self._render_locked()

        self._join(handle)
        self._logger.info("stopwatch paused at %.2fs", frame.elapsed)
        return OperationResult.success("Stopwatch paused", frame=frame)

    def stop(self) -> OperationResult:
        """End the running segment. Elapsed time and laps are kept."""
        with self._lock:
            if not self._state.is_running:
                return OperationResult.failure(
                    "Stopwatch is not running.", "invalid_transition"
                )
            self._state.fold_segment(self._clock.now())
            self._state.status = "stopped"
            handle = self._detach_refresh()
            frame = self._render_locked()

        self._join(handle)
        self._logger.info("stopwatch stopped at %.2fs", frame.elapsed)
        return OperationResult.success("Stopwatch stopped", frame=frame)

    def reset(self, confirmed: bool) -> OperationResult:
        """Zero the stopwatch and drop all laps, if *confirmed*."""
        if not confirmed:
            return OperationResult.success("Reset cancelled.")

        with self._lock:
            self._state.clear()
            handle = self._detach_refresh()

        self._join(handle)
        self._logger.info("stopwatch reset")
        return OperationResult.success("Stopwatch reset.")

    # ------------------------------------------------------------------
    # Rendering and laps
    # ------------------------------------------------------------------

    def render(self) -> RenderedFrame:
        """Render the current time and progress bar without changing state."""
        with self._lock:
            return self._render_locked()

    def lap(self) -> OperationResult:
        """Record the current total elapsed time as a new lap."""
        with self._lock:
            if not self._state.is_running:
                return OperationResult.failure(
                    "Cannot record lap: Stopwatch is not running.",
                    "invalid_transition",
                )
            elapsed = self._state.total_elapsed(self._clock.now())
            self._state.laps.append(elapsed)
            lap = Lap(index=len(self._state.laps), elapsed=elapsed)

        self._logger.debug("lap %d recorded at %.2fs", lap.index, lap.elapsed)
        return OperationResult.success(
            f"Lap {lap.index}: {format_elapsed(lap.elapsed)}", lap=lap
        )

    def list_laps(self) -> tuple[Lap, ...]:
        """All recorded laps in order, numbered from 1."""
        with self._lock:
            return tuple(
                Lap(index=i, elapsed=elapsed)
                for i, elapsed in enumerate(self._state.laps, start=1)
            )

    # ------------------------------------------------------------------
    # Settings and shutdown
    # ------------------------------------------------------------------

    def set_display_interval(self, seconds: float) -> OperationResult:
        """Change the refresh cadence. A running loop picks it up next cycle."""
        if not is_valid_interval(seconds):
            return OperationResult.failure(
                f"Invalid interval. Please enter a number between "
                f"{MIN_INTERVAL:g} and {MAX_INTERVAL:g} seconds.",
                "invalid_parameter",
            )
        with self._lock:
            self._state.display_interval = seconds
        self._logger.info("display interval set to %gs", seconds)
        return OperationResult.success(f"Display interval set to {seconds:g} seconds.")

    def close(self) -> OperationResult:
        """Stop refreshing and persist the display interval."""
        self._halt_refresh()
        if self._config_store is None:
            return OperationResult.success("Stopwatch closed.")

        interval = self.display_interval
        try:
            self._config_store.save_display_interval(interval)
        except ConfigError as e:
            self._logger.error("failed to save display interval: %s", e)
            return OperationResult.failure(
                f"Error saving config: {e}", "config_error"
            )
        return OperationResult.success(f"Saved display interval of {interval:g} seconds.")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _load_interval(self) -> None:
        try:
            interval = self._config_store.load_display_interval()
        except ConfigError as e:
            self._logger.warning("falling back to default display interval: %s", e)
            self.config_warning = (
                f"Error loading config: {e}. "
                f"Using default display interval of {DEFAULT_INTERVAL:g} second."
            )
            return

        if not is_valid_interval(interval):
            self._logger.warning("ignoring out-of-range display interval %r", interval)
            self.config_warning = (
                f"Stored display interval {interval!r} is out of range. "
                f"Using default display interval of {DEFAULT_INTERVAL:g} second."
            )
            return
        self._state.display_interval = interval

    def _render_locked(self) -> RenderedFrame:
        elapsed = self._state.total_elapsed(self._clock.now())
        return RenderedFrame(
            elapsed=elapsed,
            status=self._state.status,
            time_text=format_elapsed(elapsed),
            progress=progress_position(elapsed),
            bar_text=format_progress_bar(elapsed),
        )

    def _refresh_tick(self) -> None:
        with self._lock:
            if not self._state.is_running:
                return
            frame = self._render_locked()
        if self._on_render is not None:
            self._on_render(frame)

    def _current_interval(self) -> float:
        with self._lock:
            return self._state.display_interval

    def _detach_refresh(self) -> RefreshHandle | None:
        """Signal the loop to stop and forget it. Caller holds the lock."""
        handle, self._refresh = self._refresh, None
        if handle is not None:
            handle.request_stop()
        return handle

    def _halt_refresh(self) -> None:
        with self._lock:
            handle = self._detach_refresh()
        self._join(handle)

    @staticmethod
    def _join(handle: RefreshHandle | None) -> None:
        if handle is not None:
            handle.join()
