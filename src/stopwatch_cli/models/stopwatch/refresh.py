"""Background refresh loop that re-renders the stopwatch while it runs."""

import threading
from collections.abc import Callable
from typing import Protocol

from stopwatch_cli.utils.logger import get_logger


class RefreshHandle(Protocol):
    """What the stopwatch needs from a refresh loop."""

    def start(self) -> None: ...

    def request_stop(self) -> None: ...

    def join(self) -> None: ...


RefreshFactory = Callable[[Callable[[], None], Callable[[], float]], RefreshHandle]


class RefreshLoop:
    """Calls *tick* every *interval()* seconds on a daemon thread.

    The interval is re-read before every sleep, so a changed display
    interval applies from the next cycle. Sleeping happens on a stop event,
    which makes ``request_stop`` take effect without waiting out the sleep.
    """

    def __init__(self, tick: Callable[[], None], interval: Callable[[], float]):
        self._tick = tick
        self._interval = interval
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("Refresh loop already started")
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, name="stopwatch-refresh", daemon=True
        )
        self._thread.start()

    def request_stop(self) -> None:
        self._stop.set()

    def join(self) -> None:
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join()

    def _run(self) -> None:
        logger = get_logger()
        logger.debug("refresh loop started")
        while not self._stop.is_set():
            try:
                self._tick()
            except Exception:
                logger.exception("refresh tick failed")
            self._stop.wait(self._interval())
        logger.debug("refresh loop exited")
