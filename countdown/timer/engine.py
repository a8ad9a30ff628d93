"""Countdown state machine for Countdown.

States
------
IDLE       No countdown set.
RUNNING    ``end_time`` is in the future and the countdown is not paused.
PAUSED     Frozen; remaining time is ``end_time - paused_at``.
FINISHED   ``end_time`` has passed.

Transitions
-----------
IDLE | FINISHED → RUNNING      (start)
RUNNING → PAUSED              (pause)
PAUSED → RUNNING              (resume)
RUNNING → FINISHED            (wall clock passes end_time)
Any → IDLE                    (reset)

The status is never stored.  The single source of truth is the absolute
``end_time``, so the countdown stays correct across sleep/wake and stalled
event loops; the one-second tick only re-publishes the derived state.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

logger = logging.getLogger(__name__)

TICK_INTERVAL_MS = 1000


class InvalidDuration(ValueError):
    """Requested countdown duration is not a positive number of seconds."""


class CountdownStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"


# ── state value ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class CountdownState:
    """Immutable countdown snapshot.  Replace it whole, never patch it."""

    end_time: datetime | None = None
    last_duration: float | None = None
    is_paused: bool = False
    paused_at: datetime | None = None
    task_name: str = ""

    def __post_init__(self) -> None:
        if self.is_paused and (self.end_time is None or self.paused_at is None):
            raise ValueError("a paused countdown needs end_time and paused_at")

    def status(self, now: datetime) -> CountdownStatus:
        if self.end_time is None:
            return CountdownStatus.IDLE
        if self.is_paused:
            return CountdownStatus.PAUSED
        if self.end_time <= now:
            return CountdownStatus.FINISHED
        return CountdownStatus.RUNNING

    def remaining_time(self, now: datetime) -> float | None:
        """Seconds left, or ``None`` when idle.  Frozen while paused."""
        if self.end_time is None:
            return None
        if self.is_paused:
            return (self.end_time - self.paused_at).total_seconds()
        return max(0.0, (self.end_time - now).total_seconds())


# ── engine ────────────────────────────────────────────────────────────────


class CountdownEngine(QObject):
    """Qt-based countdown driven by an absolute end timestamp.

    Signals
    -------
    state_changed(state: CountdownState)
        Emitted after every mutation and on every tick while running.
    countdown_finished(data: dict)
        Emitted once when the countdown reaches zero.  Keys:
        ``session_id``, ``task_name``, ``duration``.
    session_abandoned(session_id: str, elapsed_seconds: int)
        Emitted by ``reset()`` when a started session had not finished.
        The engine never finalizes sessions itself.
    """

    state_changed = pyqtSignal(object)
    countdown_finished = pyqtSignal(object)
    session_abandoned = pyqtSignal(str, int)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        history=None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        super().__init__(parent)

        self._history = history
        self._clock = clock
        self._state = CountdownState()

        # ── DB tracking ───────────────────────────────────────────────
        self._session_id: str | None = None

        # ── Qt timer ──────────────────────────────────────────────────
        self._ticker = QTimer(self)
        self._ticker.setInterval(TICK_INTERVAL_MS)
        self._ticker.timeout.connect(self._on_tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> CountdownState:
        return self._state

    @property
    def status(self) -> CountdownStatus:
        return self._state.status(self._clock())

    @property
    def remaining_time(self) -> float | None:
        return self._state.remaining_time(self._clock())

    @property
    def task_name(self) -> str:
        return self._state.task_name

    @property
    def current_session_id(self) -> str | None:
        """History id of the in-flight session, if one is being tracked."""
        return self._session_id

    @property
    def is_ticking(self) -> bool:
        return self._ticker.isActive()

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self, duration: float, task_name: str = "") -> None:
        """Start a countdown of *duration* seconds.

        Valid from IDLE or FINISHED; ignored while running or paused.
        Raises :class:`InvalidDuration` for a non-positive duration or one
        whose end falls outside the representable date range.
        """
        if isinstance(duration, bool) or not isinstance(duration, (int, float)):
            raise InvalidDuration(f"duration must be a number, got {duration!r}")
        if not math.isfinite(duration) or duration <= 0:
            raise InvalidDuration(f"duration must be positive, got {duration!r}")
        now = self._clock()
        try:
            end_time = now + timedelta(seconds=duration)
        except OverflowError:
            raise InvalidDuration(f"duration too large: {duration!r}") from None

        if self.status in (CountdownStatus.RUNNING, CountdownStatus.PAUSED):
            return
        self._deliver_pending_finish()

        self._session_id = None
        if self._history is not None:
            self._session_id = self._history.create_session(task_name)

        self._set_state(CountdownState(
            end_time=end_time,
            last_duration=duration,
            is_paused=False,
            paused_at=None,
            task_name=task_name,
        ))
        self._ticker.start()
        logger.debug("Countdown started: %ss %r", duration, task_name)

    def pause(self) -> None:
        """Freeze a running countdown on a whole number of seconds."""
        if self.status != CountdownStatus.RUNNING:
            return
        # stop first so no tick lands between the snapshot and the freeze
        self._ticker.stop()

        now = self._clock()
        remaining = math.ceil((self._state.end_time - now).total_seconds())
        self._set_state(CountdownState(
            end_time=now + timedelta(seconds=remaining),
            last_duration=self._state.last_duration,
            is_paused=True,
            paused_at=now,
            task_name=self._state.task_name,
        ))
        logger.debug("Countdown paused with %ss left", remaining)

    def resume(self) -> None:
        """Continue a paused countdown, shifting the end by the pause length."""
        if self.status != CountdownStatus.PAUSED:
            return

        now = self._clock()
        paused_for = now - self._state.paused_at
        self._set_state(CountdownState(
            end_time=self._state.end_time + paused_for,
            last_duration=self._state.last_duration,
            is_paused=False,
            paused_at=None,
            task_name=self._state.task_name,
        ))
        self._ticker.start()
        logger.debug("Countdown resumed after %ss", paused_for.total_seconds())

    def toggle_pause(self) -> None:
        status = self.status
        if status == CountdownStatus.RUNNING:
            self.pause()
        elif status == CountdownStatus.PAUSED:
            self.resume()

    def reset(self) -> None:
        """Return to IDLE from any state.

        An unfinished tracked session is reported through
        ``session_abandoned``; finalizing it is up to the listener.
        """
        self._deliver_pending_finish()
        self._ticker.stop()

        abandoned_id = self._session_id
        elapsed = self._elapsed_seconds()
        was_active = self.status in (CountdownStatus.RUNNING, CountdownStatus.PAUSED)
        self._session_id = None

        self._set_state(CountdownState())
        logger.debug("Countdown reset")

        if abandoned_id is not None and was_active:
            self.session_abandoned.emit(abandoned_id, elapsed)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self) -> None:
        if self._state.is_paused:
            return

        remaining = self._state.remaining_time(self._clock())
        just_finished = (
            remaining is not None and remaining <= 0 and self._ticker.isActive()
        )
        if just_finished:
            self._ticker.stop()

        # re-publish every tick; observers render from this signal alone
        self._set_state(self._state)

        if just_finished:
            self._finish()

    def _deliver_pending_finish(self) -> None:
        """Emit the completion of a countdown that hit zero between ticks."""
        if self.status == CountdownStatus.FINISHED and self._ticker.isActive():
            self._ticker.stop()
            self._finish()

    def _finish(self) -> None:
        finished_id = self._session_id  # capture before clearing
        self._session_id = None
        logger.debug("Countdown finished: %r", self._state.task_name)
        self.countdown_finished.emit({
            "session_id": finished_id,
            "task_name": self._state.task_name,
            "duration": self._state.last_duration,
        })

    def _elapsed_seconds(self) -> int:
        """Whole seconds of the requested duration already used up."""
        if self._state.last_duration is None:
            return 0
        remaining = self._state.remaining_time(self._clock()) or 0.0
        return max(0, round(self._state.last_duration - remaining))

    def _set_state(self, new_state: CountdownState) -> None:
        self._state = new_state
        self.state_changed.emit(new_state)
