"""SQLAlchemy ORM models for Countdown."""

import uuid
from datetime import datetime

from sqlalchemy import Column, String, Boolean, DateTime, Integer
from sqlalchemy.orm import DeclarativeBase


DEFAULT_TASK_NAME = "Untitled task"


def _new_id() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    pass


class FocusSession(Base):
    """One countdown run, completed or abandoned.

    The record is written open when a countdown starts and finalized once
    (``end_time``, ``duration``, ``is_completed``) when it finishes or is
    abandoned.  Columns may be added in later versions but never removed.
    """

    __tablename__ = "focus_sessions"

    id = Column(String(36), primary_key=True, default=_new_id)
    task_name = Column(String(255), nullable=False, default=DEFAULT_TASK_NAME)
    start_time = Column(DateTime, nullable=False, default=datetime.now, index=True)
    end_time = Column(DateTime, nullable=True)
    duration = Column(Integer, nullable=False, default=0)  # seconds
    is_completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    @property
    def is_open(self) -> bool:
        return self.end_time is None

    def __repr__(self) -> str:
        return (
            f"<FocusSession id={self.id} task={self.task_name!r} "
            f"duration={self.duration} completed={self.is_completed}>"
        )
