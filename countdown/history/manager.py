"""Focus history: records sessions and answers statistics queries.

All persistence goes through :func:`countdown.database.db.get_session`.
The store never lets a database error escape: failures are logged and the
caller gets a safe default (``None``, ``False``, empty statistics or an
empty list), so the timer keeps running without history tracking.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date, datetime
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError

from ..database.db import get_session
from ..database.models import DEFAULT_TASK_NAME, FocusSession
from .statistics import (
    FocusStatistics,
    start_of_day,
    start_of_month,
    start_of_week,
)

logger = logging.getLogger(__name__)


class FocusHistoryManager:
    """Session store and statistics aggregator.

    Parameters
    ----------
    db_enabled:
        ``False`` makes the store permanently unavailable; every call
        degrades to its default result.
    clock:
        Returns the current local time.  Injected by tests.
    """

    def __init__(
        self,
        *,
        db_enabled: bool = True,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._db_enabled = db_enabled
        self._clock = clock

    @property
    def available(self) -> bool:
        return self._db_enabled

    # ══════════════════════════════════════════════════════════════════
    #  WRITES
    # ══════════════════════════════════════════════════════════════════

    def create_session(self, task_name: str) -> str | None:
        """Insert an open session starting now and return its id."""
        if not self._db_enabled:
            return None

        now = self._clock()
        session_id = str(uuid.uuid4())
        try:
            with get_session() as db:
                db.add(FocusSession(
                    id=session_id,
                    task_name=task_name or DEFAULT_TASK_NAME,
                    start_time=now,
                    duration=0,
                    is_completed=False,
                    created_at=now,
                ))
        except (SQLAlchemyError, OSError):
            logger.exception("Failed to create session for %r", task_name)
            return None
        return session_id

    def finish_session(
        self, session_id: str, duration: float, is_completed: bool
    ) -> bool:
        """Finalize an open session.  A session is finalized only once."""
        if not self._db_enabled or session_id is None:
            return False

        try:
            with get_session() as db:
                record = db.get(FocusSession, session_id)
                if record is None:
                    logger.warning("Cannot finish unknown session %s", session_id)
                    return False
                if not record.is_open:
                    logger.warning("Session %s is already finished", session_id)
                    return False
                record.end_time = self._clock()
                record.duration = max(0, round(duration))
                record.is_completed = is_completed
        except (SQLAlchemyError, OSError):
            logger.exception("Failed to finish session %s", session_id)
            return False
        return True

    def delete_session(self, session_id: str) -> bool:
        if not self._db_enabled:
            return False

        try:
            with get_session() as db:
                record = db.get(FocusSession, session_id)
                if record is None:
                    return False
                db.delete(record)
        except (SQLAlchemyError, OSError):
            logger.exception("Failed to delete session %s", session_id)
            return False
        return True

    # ══════════════════════════════════════════════════════════════════
    #  STATISTICS
    # ══════════════════════════════════════════════════════════════════

    def today_statistics(self) -> FocusStatistics:
        return self.query_statistics(start_of_day(self._clock()))

    def week_statistics(self) -> FocusStatistics:
        return self.query_statistics(start_of_week(self._clock()))

    def month_statistics(self) -> FocusStatistics:
        return self.query_statistics(start_of_month(self._clock()))

    def all_time_statistics(self) -> FocusStatistics:
        return self.query_statistics(datetime.min)

    def query_statistics(self, since: datetime) -> FocusStatistics:
        """Aggregate every session that started at or after *since*.

        ``session_count``, ``completed_count`` and ``all_time_total`` cover
        the fetched window.  The today/week/month totals are re-filtered
        against the current calendar boundaries, whatever *since* was.
        """
        stats = FocusStatistics()
        sessions = self._fetch(since)
        if not sessions:
            return stats

        now = self._clock()
        day_start = start_of_day(now)
        week_start = start_of_week(now)
        month_start = start_of_month(now)

        stats.session_count = len(sessions)
        stats.completed_count = sum(1 for s in sessions if s.is_completed)
        stats.all_time_total = sum(s.duration for s in sessions)
        stats.today_total = sum(
            s.duration for s in sessions if s.start_time >= day_start
        )
        stats.week_total = sum(
            s.duration for s in sessions if s.start_time >= week_start
        )
        stats.month_total = sum(
            s.duration for s in sessions if s.start_time >= month_start
        )
        return stats

    # ══════════════════════════════════════════════════════════════════
    #  LISTINGS
    # ══════════════════════════════════════════════════════════════════

    def all_sessions(self) -> list[FocusSession]:
        """Every session, newest start first."""
        return self._fetch(None)

    def sessions_grouped_by_date(self) -> list[tuple[date, list[FocusSession]]]:
        """Sessions bucketed by the calendar day they started on.

        Days are ordered newest first; each bucket keeps the fetch order.
        """
        grouped: dict[date, list[FocusSession]] = {}
        for sess in self.all_sessions():
            grouped.setdefault(sess.start_time.date(), []).append(sess)
        return sorted(grouped.items(), key=lambda item: item[0], reverse=True)

    # ── internal ──────────────────────────────────────────────────────

    def _fetch(self, since: datetime | None) -> list[FocusSession]:
        if not self._db_enabled:
            return []

        try:
            with get_session() as db:
                query = db.query(FocusSession)
                if since is not None:
                    query = query.filter(FocusSession.start_time >= since)
                return query.order_by(FocusSession.start_time.desc()).all()
        except (SQLAlchemyError, OSError):
            logger.exception("Failed to fetch sessions")
            return []
