"""Focus history package."""

from .manager import FocusHistoryManager
from .statistics import (
    FocusStatistics,
    format_duration,
    start_of_day,
    start_of_month,
    start_of_week,
)

__all__ = [
    "FocusHistoryManager",
    "FocusStatistics",
    "format_duration",
    "start_of_day",
    "start_of_month",
    "start_of_week",
]
