"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/Countdown/settings.json

Usage::

    settings = load_settings()
    settings.minutes = 50
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .database.models import DEFAULT_TASK_NAME

logger = logging.getLogger(__name__)

# Reuse the app-support directory from db.py
APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "Countdown"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── countdown input (last used) ───────────────────────────────────
    minutes: int = 25
    seconds: int = 0
    task_name: str = DEFAULT_TASK_NAME

    # ── history ───────────────────────────────────────────────────────
    record_abandoned_sessions: bool = True

    @property
    def duration(self) -> int:
        return self.minutes * 60 + self.seconds


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from disk, falling back to defaults."""
    path = path or SETTINGS_PATH
    if not path.exists():
        return Settings()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        # Only use keys that exist in the dataclass
        valid_keys = {f.name for f in fields(Settings)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return Settings(**filtered)
    except (OSError, ValueError, AttributeError) as exc:
        logger.warning("Ignoring unreadable settings at %s: %s", path, exc)
        return Settings()


def save_settings(settings: Settings, path: Path | None = None) -> None:
    """Write settings to disk as JSON."""
    path = path or SETTINGS_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
