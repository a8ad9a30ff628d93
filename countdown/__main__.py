"""Allow running Countdown as a module: python -m countdown.

Headless runner: starts a countdown from the saved settings, prints the
menu-bar title on every state change and records the session.  Ctrl-C
resets the countdown (recording it as abandoned) and quits.
"""

import logging
import signal
import sys
from datetime import datetime

from PyQt6.QtCore import QCoreApplication, QTimer
from sqlalchemy.exc import SQLAlchemyError

from .database.db import init_db
from .history.manager import FocusHistoryManager
from .history.statistics import format_duration
from .recorder import SessionRecorder
from .settings import load_settings
from .timer.display import IDLE_PLACEHOLDER, parse_duration, status_title
from .timer.engine import CountdownEngine, InvalidDuration

logger = logging.getLogger("countdown")


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    db_enabled = True
    try:
        init_db()
    except (SQLAlchemyError, OSError):
        logger.exception("History database unavailable; not tracking sessions")
        db_enabled = False

    settings = load_settings()
    try:
        duration = parse_duration(str(settings.minutes), str(settings.seconds))
    except InvalidDuration as exc:
        logger.error("Invalid countdown in settings: %s", exc)
        sys.exit(2)

    app = QCoreApplication(sys.argv)
    app.setApplicationName("Countdown")
    app.setOrganizationName("Countdown")

    history = FocusHistoryManager(db_enabled=db_enabled)
    engine = CountdownEngine(history=history)
    recorder = SessionRecorder(  # noqa: F841  kept alive for its slots
        engine, history, record_abandoned=settings.record_abandoned_sessions
    )

    def show(state) -> None:
        title = status_title(state, datetime.now()) or IDLE_PLACEHOLDER
        print(f"\r{state.task_name}  {title}  ", end="", flush=True)

    def finished(_data) -> None:
        print()
        today = history.today_statistics()
        logger.info(
            "Focused %s today across %d session(s)",
            format_duration(today.today_total),
            today.session_count,
        )
        app.quit()

    def interrupt(*_args) -> None:
        print()
        engine.reset()
        app.quit()

    engine.state_changed.connect(show)
    engine.countdown_finished.connect(finished)
    signal.signal(signal.SIGINT, interrupt)

    # Wake the interpreter periodically so Python-level signal handlers run
    wake = QTimer()
    wake.start(200)
    wake.timeout.connect(lambda: None)

    engine.start(duration, settings.task_name)
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
