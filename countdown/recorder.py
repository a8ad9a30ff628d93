"""Glue between the countdown engine and the focus history.

The engine only reports what happened; this decides what gets written.
Completed countdowns are stored as completed sessions.  Countdowns reset
before reaching zero are stored as incomplete with the time actually
spent, or dropped entirely when ``record_abandoned`` is off.
"""

from __future__ import annotations

import logging

from .history.manager import FocusHistoryManager
from .timer.engine import CountdownEngine

logger = logging.getLogger(__name__)


class SessionRecorder:

    def __init__(
        self,
        engine: CountdownEngine,
        history: FocusHistoryManager,
        *,
        record_abandoned: bool = True,
    ) -> None:
        self._history = history
        self.record_abandoned = record_abandoned

        engine.countdown_finished.connect(self._on_finished)
        engine.session_abandoned.connect(self._on_abandoned)

    def _on_finished(self, data: dict) -> None:
        session_id = data.get("session_id")
        if session_id is None:
            return  # started while history was unavailable
        self._history.finish_session(session_id, data["duration"], True)

    def _on_abandoned(self, session_id: str, elapsed_seconds: int) -> None:
        if self.record_abandoned:
            self._history.finish_session(session_id, elapsed_seconds, False)
        else:
            logger.debug("Dropping abandoned session %s", session_id)
            self._history.delete_session(session_id)
