"""Text helpers for the status-bar title and the duration input."""

from __future__ import annotations

from datetime import datetime

from .engine import (
    CountdownEngine, CountdownState, CountdownStatus, InvalidDuration,
)

IDLE_PLACEHOLDER = "--:--"
FINISHED_TITLE = "Done"


def format_remaining(seconds: float) -> str:
    """``MM:SS`` under one hour, ``H:MM:SS`` from one hour up."""
    total = max(0, int(seconds))
    hours, rem = divmod(total, 3600)
    minutes, secs = divmod(rem, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


def status_title(state: CountdownState, now: datetime) -> str:
    """Menu-bar title text.  Empty when idle (the clock icon shows instead)."""
    status = state.status(now)
    if status == CountdownStatus.IDLE:
        return ""
    if status == CountdownStatus.FINISHED:
        return FINISHED_TITLE
    return format_remaining(state.remaining_time(now))


def parse_duration(minutes: str, seconds: str) -> int:
    """Turn the minutes / seconds input fields into a duration in seconds.

    Raises :class:`InvalidDuration` unless both fields are non-negative
    integers with a positive total.
    """
    try:
        mins = int(str(minutes).strip())
        secs = int(str(seconds).strip())
    except ValueError:
        raise InvalidDuration(
            f"not a valid time: {minutes!r}:{seconds!r}"
        ) from None
    if mins < 0 or secs < 0:
        raise InvalidDuration(f"negative time: {mins}:{secs}")
    total = mins * 60 + secs
    if total <= 0:
        raise InvalidDuration("duration must be greater than zero")
    return total


_ACTION_LABELS = {
    CountdownStatus.IDLE: "Start",
    CountdownStatus.RUNNING: "Pause",
    CountdownStatus.PAUSED: "Resume",
    CountdownStatus.FINISHED: "Start",
}


def primary_action_label(status: CountdownStatus) -> str:
    return _ACTION_LABELS[status]


def primary_action(
    engine: CountdownEngine, minutes: str, seconds: str, task_name: str = ""
) -> None:
    """The single start / pause / resume button, dispatched on status.

    The input fields are only parsed when a new countdown starts, so an
    invalid entry never blocks pausing or resuming.
    """
    status = engine.status
    if status in (CountdownStatus.IDLE, CountdownStatus.FINISHED):
        engine.start(parse_duration(minutes, seconds), task_name)
    elif status == CountdownStatus.RUNNING:
        engine.pause()
    else:
        engine.resume()
