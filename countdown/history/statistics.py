"""Focus statistics aggregate and calendar-period helpers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass
class FocusStatistics:
    """Totals over a window of sessions.  Durations are in seconds.

    Never persisted; rebuilt from the session table on every query.
    """

    today_total: int = 0
    week_total: int = 0
    month_total: int = 0
    all_time_total: int = 0
    session_count: int = 0
    completed_count: int = 0

    @property
    def completion_rate(self) -> float:
        """0.0 → 1.0 share of sessions that ran to completion."""
        if self.session_count <= 0:
            return 0.0
        return self.completed_count / self.session_count


# ── period boundaries ─────────────────────────────────────────────────────


def start_of_day(now: datetime) -> datetime:
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_week(now: datetime) -> datetime:
    """Midnight on the Monday of *now*'s ISO week."""
    return start_of_day(now) - timedelta(days=now.weekday())


def start_of_month(now: datetime) -> datetime:
    return start_of_day(now).replace(day=1)


# ── formatting ────────────────────────────────────────────────────────────


def format_duration(seconds: float) -> str:
    """Human-readable total, e.g. ``"1h 5m"``, ``"25m"``, ``"0m"``."""
    total = max(0, int(seconds))
    hours, rem = divmod(total, 3600)
    minutes = rem // 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"
