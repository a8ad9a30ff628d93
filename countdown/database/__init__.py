"""Database package."""

from .db import configure_engine, get_session, init_db
from .models import DEFAULT_TASK_NAME, FocusSession

__all__ = [
    "configure_engine",
    "get_session",
    "init_db",
    "DEFAULT_TASK_NAME",
    "FocusSession",
]
