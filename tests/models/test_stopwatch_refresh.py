"""Tests for the background refresh loop using real threads.

Synchronisation happens through ``threading.Event`` handshakes; timeouts on
the waits only bound a hung test and never decide the outcome.
"""

from __future__ import annotations

import threading

import pytest

from stopwatch_cli.models.stopwatch import MonotonicClock, RefreshLoop, Stopwatch

TIMEOUT = 5.0


def _refresh_threads() -> list[threading.Thread]:
    return [
        t for t in threading.enumerate() if t.name == "stopwatch-refresh" and t.is_alive()
    ]


class TestRefreshLoop:
    def test_ticks_repeatedly(self):
        calls = []
        enough = threading.Event()

        def tick():
            calls.append(1)
            if len(calls) >= 3:
                enough.set()

        loop = RefreshLoop(tick, lambda: 0.01)
        loop.start()
        assert enough.wait(TIMEOUT)
        loop.request_stop()
        loop.join()

        assert len(calls) >= 3
        assert not loop.is_alive

    def test_request_stop_interrupts_sleep(self):
        ticked = threading.Event()
        loop = RefreshLoop(ticked.set, lambda: 3600.0)
        loop.start()
        assert ticked.wait(TIMEOUT)

        loop.request_stop()
        loop.join()

        assert not loop.is_alive

    def test_interval_is_read_every_cycle(self):
        intervals = iter([0.01, 0.02, 0.03])
        seen = []
        done = threading.Event()

        def interval():
            value = next(intervals, 0.01)
            seen.append(value)
            if len(seen) >= 3:
                done.set()
            return value

        loop = RefreshLoop(lambda: None, interval)
        loop.start()
        assert done.wait(TIMEOUT)
        loop.request_stop()
        loop.join()

        assert seen[:3] == [0.01, 0.02, 0.03]

    def test_failing_tick_does_not_end_loop(self):
        calls = []
        recovered = threading.Event()

        def tick():
            calls.append(1)
            if len(calls) == 1:
                raise ValueError("boom")
            recovered.set()

        loop = RefreshLoop(tick, lambda: 0.01)
        loop.start()
        assert recovered.wait(TIMEOUT)
        loop.request_stop()
        loop.join()

    def test_cannot_start_twice(self):
        loop = RefreshLoop(lambda: None, lambda: 0.01)
        loop.start()
        try:
            with pytest.raises(RuntimeError):
                loop.start()
        finally:
            loop.request_stop()
            loop.join()

    def test_join_before_start_is_noop(self):
        loop = RefreshLoop(lambda: None, lambda: 0.01)
        loop.join()
        assert not loop.is_alive


class TestStopwatchWithRealLoop:
    """Race-freedom between foreground transitions and the refresh thread."""

    @pytest.mark.parametrize("action", ["pause", "stop", "reset"])
    def test_no_running_frame_after_transition_returns(self, action):
        records = []
        first_frame = threading.Event()
        returned = threading.Event()

        def sink(frame):
            records.append((frame.status, returned.is_set()))
            first_frame.set()

        sw = Stopwatch(clock=MonotonicClock(), on_render=sink)
        sw.set_display_interval(0.1)
        sw.start()
        assert first_frame.wait(TIMEOUT)

        if action == "reset":
            sw.reset(confirmed=True)
        else:
            getattr(sw, action)()
        returned.set()

        assert _refresh_threads() == []
        assert all(not after for _, after in records)
        assert all(status == "running" for status, _ in records)

    def test_stop_waits_for_in_flight_render(self):
        entered = threading.Event()
        release = threading.Event()
        emitted = []

        def sink(frame):
            emitted.append(frame)
            if len(emitted) == 1:
                entered.set()
                release.wait(TIMEOUT)

        sw = Stopwatch(clock=MonotonicClock(), on_render=sink)
        sw.start()
        assert entered.wait(TIMEOUT)

        stop_done = threading.Event()
        stopper = threading.Thread(target=lambda: (sw.stop(), stop_done.set()))
        stopper.start()

        # stop() has changed status but cannot return while the sink is busy
        assert not stop_done.wait(0.2)
        release.set()
        stopper.join(TIMEOUT)

        assert stop_done.is_set()
        assert sw.status == "stopped"
        assert len(emitted) == 1
        assert _refresh_threads() == []

    def test_resume_launches_exactly_one_loop(self):
        ticked = threading.Event()
        sw = Stopwatch(clock=MonotonicClock(), on_render=lambda frame: ticked.set())
        sw.start()
        sw.pause()
        sw.start()
        try:
            assert ticked.wait(TIMEOUT)
            assert len(_refresh_threads()) == 1
        finally:
            sw.close()

        assert _refresh_threads() == []
