"""Timer stand-in for session tests."""

from typing import Callable, List


class FakeTimer:
    """Timer stand-in that records start/cancel and never ticks on its own."""

    instances: List["FakeTimer"] = []

    def __init__(self, seconds: int, on_tick: Callable[[], None], interval: float):
        self.seconds = seconds
        self.on_tick = on_tick
        self.interval = interval
        self.started = False
        self.cancel_calls = 0
        FakeTimer.instances.append(self)

    @property
    def cancelled(self) -> bool:
        return self.cancel_calls > 0

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancel_calls += 1

    def fire(self, times: int = 1) -> None:
        """Deliver ticks unless cancelled, like the real timer."""
        for _ in range(times):
            if self.cancelled:
                return
            self.on_tick()
