"""Timer package."""

from .engine import (
    CountdownEngine,
    CountdownState,
    CountdownStatus,
    InvalidDuration,
    TICK_INTERVAL_MS,
)
from .display import (
    format_remaining,
    parse_duration,
    primary_action,
    primary_action_label,
    status_title,
)

__all__ = [
    "CountdownEngine",
    "CountdownState",
    "CountdownStatus",
    "InvalidDuration",
    "TICK_INTERVAL_MS",
    "format_remaining",
    "parse_duration",
    "primary_action",
    "primary_action_label",
    "status_title",
]
