"""Countdown timer for timed Taboo sessions.

The timer only delivers ticks; the session owns the remaining time and
decides when it runs out. One tick is delivered per interval on a daemon
thread until the timer is cancelled or the requested number of ticks has
been delivered.

    timer = CountdownTimer(60, session.tick)
    timer.start()
    ...
    timer.cancel()   # idempotent, safe from inside on_tick

Display helpers (format_time, is_warning, timer_panel) follow the
green/yellow/red countdown used on the play screen."""

from __future__ import annotations

import threading
from typing import Callable, Optional

from rich.panel import Panel
from rich.text import Text

from taboo.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_WARNING = 10  # seconds
UNLIMITED = "∞"


class CountdownTimer:
    """Periodic tick source with synchronous, idempotent cancellation.

    Attributes:
        seconds: Maximum number of ticks to deliver
        interval: Seconds between ticks
    """

    def __init__(
        self,
        seconds: int,
        on_tick: Callable[[], None],
        interval: float = 1.0,
    ) -> None:
        """Initialize countdown timer.

        Args:
            seconds: Number of ticks to deliver before stopping on its own
            on_tick: Callback invoked from the timer thread once per tick
            interval: Seconds between ticks
        """
        if seconds <= 0:
            raise ValueError("seconds must be positive")
        if interval <= 0:
            raise ValueError("interval must be positive")

        self.seconds = seconds
        self.interval = interval
        self.on_tick = on_tick
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._cancelled = False
        self._ticks_delivered = 0

    @property
    def is_running(self) -> bool:
        """Check if the tick thread is alive and not cancelled."""
        with self._lock:
            alive = self._thread is not None and self._thread.is_alive()
            return alive and not self._cancelled

    @property
    def cancelled(self) -> bool:
        with self._lock:
            return self._cancelled

    @property
    def ticks_delivered(self) -> int:
        with self._lock:
            return self._ticks_delivered

    def start(self) -> None:
        """Start delivering ticks. Starting twice or after cancel is a no-op."""
        with self._lock:
            if self._thread is not None or self._cancelled:
                return
            self._thread = threading.Thread(
                target=self._run, name="taboo-countdown", daemon=True
            )
            self._thread.start()

    def cancel(self) -> None:
        """Stop delivering ticks.

        Once this returns no new tick is started. It does not wait for the
        worker thread, so it can be called from inside on_tick or while the
        caller holds a lock the callback needs.
        """
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            self._stop_event.set()

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for the worker thread to exit."""
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    def _run(self) -> None:
        for _ in range(self.seconds):
            if self._stop_event.wait(self.interval):
                return
            with self._lock:
                if self._cancelled:
                    return
                self._ticks_delivered += 1
            try:
                self.on_tick()
            except Exception:
                logger.exception("Timer tick callback failed")
                self.cancel()
                return


def format_time(seconds: Optional[int]) -> str:
    """Format remaining time as m:ss, or the infinity sign when untimed.

    Returns:
        Time string like "1:05"
    """
    if seconds is None:
        return UNLIMITED
    seconds = max(0, int(seconds))
    minutes, secs = divmod(seconds, 60)
    return f"{minutes}:{secs:02d}"


def is_warning(seconds: Optional[int], threshold: int = DEFAULT_WARNING) -> bool:
    """Check if remaining time is low enough to show the warning colour."""
    return seconds is not None and seconds <= threshold


def timer_panel(
    seconds: Optional[int], warning_threshold: int = DEFAULT_WARNING
) -> Panel:
    """Get Rich Panel showing the remaining time.

    Args:
        seconds: Remaining seconds (None when untimed)
        warning_threshold: Seconds at which the display turns yellow

    Returns:
        Rich Panel with timer display
    """
    if seconds is not None and seconds <= 0:
        color = "red"
        status = "TIME'S UP!"
    elif is_warning(seconds, warning_threshold):
        color = "yellow"
        status = format_time(seconds)
    else:
        color = "green"
        status = format_time(seconds)

    text = Text()
    text.append("Time ", style="bold")
    text.append(status, style=f"bold {color}")

    return Panel(
        text,
        title="[bold]Time Remaining[/bold]",
        border_style=color,
        width=22,
    )
