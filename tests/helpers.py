"""Shared test helpers for Countdown."""

from datetime import datetime, timedelta

from PyQt6.QtCore import QEventLoop, QTimer

from countdown.timer.engine import CountdownEngine


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakeClock:
    """Controllable stand-in for ``datetime.now``."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)

    def set(self, now: datetime) -> None:
        self.now = now


def run_ticks(engine: CountdownEngine, clock: FakeClock, count: int) -> None:
    """Advance the clock one second per tick, delivering each tick."""
    for _ in range(count):
        clock.advance(1)
        engine._on_tick()


def complete_countdown(engine: CountdownEngine, clock: FakeClock) -> None:
    """Jump straight to the end of the current countdown and tick once."""
    clock.advance(engine.remaining_time)
    engine._on_tick()


def wait_ms(ms: int) -> None:
    """Spin a local Qt event loop for *ms* milliseconds."""
    loop = QEventLoop()
    QTimer.singleShot(ms, loop.quit)
    loop.exec()
