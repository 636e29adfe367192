"""Tests for the countdown timer and time display helpers.

Tests the countdown timer functionality:
- Tick delivery on a background thread
- Idempotent cancellation
- Time formatting and warning colours
"""

import threading
from unittest.mock import patch

import pytest
from rich.panel import Panel

from taboo.game.timer import (
    UNLIMITED,
    CountdownTimer,
    format_time,
    is_warning,
    timer_panel,
)


class TestCountdownTimer:
    """Test CountdownTimer class."""

    def test_invalid_arguments(self) -> None:
        with pytest.raises(ValueError):
            CountdownTimer(0, lambda: None)
        with pytest.raises(ValueError):
            CountdownTimer(5, lambda: None, interval=0)

    def test_delivers_requested_ticks(self) -> None:
        """Timer should stop on its own after `seconds` ticks."""
        ticks = []
        timer = CountdownTimer(3, lambda: ticks.append(1), interval=0.01)
        timer.start()
        timer.join(timeout=5.0)
        assert len(ticks) == 3
        assert timer.ticks_delivered == 3
        assert timer.is_running is False

    def test_cancel_stops_ticks(self) -> None:
        """No tick is delivered after cancel() returns."""
        ticks = []
        timer = CountdownTimer(1000, lambda: ticks.append(1), interval=0.01)
        timer.start()
        timer.cancel()
        delivered = timer.ticks_delivered
        timer.join(timeout=5.0)
        assert timer.ticks_delivered == delivered
        assert len(ticks) == delivered
        assert timer.cancelled is True

    def test_cancel_is_idempotent(self) -> None:
        timer = CountdownTimer(5, lambda: None, interval=0.01)
        timer.cancel()
        timer.cancel()
        assert timer.cancelled is True

    def test_start_after_cancel_is_noop(self) -> None:
        ticks = []
        timer = CountdownTimer(5, lambda: ticks.append(1), interval=0.01)
        timer.cancel()
        timer.start()
        assert timer.is_running is False
        assert ticks == []

    def test_cancel_from_inside_callback(self) -> None:
        """A callback may cancel its own timer without deadlocking."""
        done = threading.Event()
        holder = {}

        def on_tick() -> None:
            holder["timer"].cancel()
            done.set()

        timer = CountdownTimer(10, on_tick, interval=0.01)
        holder["timer"] = timer
        timer.start()
        assert done.wait(timeout=5.0)
        timer.join(timeout=5.0)
        assert timer.ticks_delivered == 1

    def test_failing_callback_logged_once_and_stopped(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A raising callback is logged, cancels the timer and ends the thread quietly."""
        thread_errors = []
        monkeypatch.setattr(threading, "excepthook", thread_errors.append)

        def on_tick() -> None:
            raise RuntimeError("boom")

        timer = CountdownTimer(10, on_tick, interval=0.01)
        with patch("taboo.game.timer.logger") as log:
            timer.start()
            timer.join(timeout=5.0)

        assert timer.cancelled is True
        assert timer.ticks_delivered == 1
        log.exception.assert_called_once_with("Timer tick callback failed")
        assert thread_errors == []


class TestFormatTime:
    """Test time formatting."""

    @pytest.mark.parametrize(
        "seconds,expected",
        [(0, "0:00"), (9, "0:09"), (60, "1:00"), (65, "1:05"), (600, "10:00")],
    )
    def test_format(self, seconds: int, expected: str) -> None:
        assert format_time(seconds) == expected

    def test_unlimited(self) -> None:
        assert format_time(None) == UNLIMITED

    def test_negative_clamped(self) -> None:
        assert format_time(-3) == "0:00"


class TestTimerDisplay:
    """Test warning state and panel."""

    def test_is_warning(self) -> None:
        assert is_warning(10) is True
        assert is_warning(11) is False
        assert is_warning(None) is False
        assert is_warning(5, threshold=3) is False

    @pytest.mark.parametrize(
        "seconds,color",
        [(30, "green"), (8, "yellow"), (0, "red"), (None, "green")],
    )
    def test_panel_colour(self, seconds, color: str) -> None:
        panel = timer_panel(seconds)
        assert isinstance(panel, Panel)
        assert panel.border_style == color
