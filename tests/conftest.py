"""Shared test fixtures and configuration.

Provides a fake clock and a manually driven refresh loop so the stopwatch
can be exercised without real time passing, and keeps log files and config
files inside pytest's temporary directories.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from stopwatch_cli.models.stopwatch import Stopwatch


# ---------------------------------------------------------------------------
# Logging isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True, scope="session")
def isolated_log_dir(tmp_path_factory):
    """Route the application log file to a temporary directory."""
    log_dir = tmp_path_factory.mktemp("logs")
    with patch("stopwatch_cli.utils.logger.user_log_dir", return_value=str(log_dir)):
        yield log_dir


@pytest.fixture(autouse=True, scope="session")
def wide_terminal():
    """Give Rich consoles a wide terminal so long messages are not wrapped."""
    with pytest.MonkeyPatch.context() as mp:
        mp.setenv("COLUMNS", "200")
        yield


# ---------------------------------------------------------------------------
# Time and scheduling doubles
# ---------------------------------------------------------------------------


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        self._now += seconds


class ManualRefreshLoop:
    """Refresh loop whose cycles are run by the test calling ``tick()``."""

    def __init__(self, tick, interval):
        self._tick = tick
        self.interval = interval
        self.started = False
        self.stop_requested = False
        self.joined = False

    @property
    def active(self) -> bool:
        return self.started and not self.stop_requested

    def start(self) -> None:
        self.started = True

    def request_stop(self) -> None:
        self.stop_requested = True

    def join(self) -> None:
        self.joined = True

    def tick(self) -> None:
        self._tick()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def refresh_loops() -> list[ManualRefreshLoop]:
    """Every refresh loop the stopwatch under test has created, in order."""
    return []


@pytest.fixture()
def refresh_factory(refresh_loops):
    def factory(tick, interval):
        loop = ManualRefreshLoop(tick, interval)
        refresh_loops.append(loop)
        return loop

    return factory


@pytest.fixture()
def frames() -> list:
    """Frames handed to the render sink by refresh cycles."""
    return []


@pytest.fixture()
def stopwatch(clock, refresh_factory, frames) -> Stopwatch:
    """Stopwatch on a fake clock with a manual refresh loop and no config store."""
    return Stopwatch(
        clock=clock,
        on_render=frames.append,
        refresh_factory=refresh_factory,
    )


# ---------------------------------------------------------------------------
# Config isolation helpers
# ---------------------------------------------------------------------------


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by a temporary directory.

    Patches the platform config dir so files land in *tmp_path* only and
    clears the lru_cache so each test gets a fresh service instance.
    """
    from stopwatch_cli.services.config_service import (
        ConfigService,
        get_config_service,
    )

    get_config_service.cache_clear()
    with patch(
        "stopwatch_cli.services.config_service.user_config_dir",
        return_value=str(tmp_path),
    ):
        yield ConfigService()
    get_config_service.cache_clear()
