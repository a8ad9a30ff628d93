"""Shared pytest fixtures for Countdown tests."""

import sys
from datetime import datetime

import pytest

from PyQt6.QtCore import QCoreApplication

from countdown.database.db import configure_engine, init_db
from countdown.history.manager import FocusHistoryManager
from countdown.recorder import SessionRecorder
from countdown.timer.engine import CountdownEngine

from helpers import FakeClock


# Wednesday, mid-month: day, ISO week and month boundaries all differ.
FIXED_NOW = datetime(2024, 5, 15, 10, 0, 0)


@pytest.fixture(scope="session")
def qapp():
    """A single QCoreApplication instance shared across the entire test run."""
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def clock():
    return FakeClock(FIXED_NOW)


@pytest.fixture
def history(clock):
    """History store on the in-memory DB, driven by the fake clock."""
    return FocusHistoryManager(db_enabled=True, clock=clock)


@pytest.fixture
def history_off(clock):
    """History store with persistence unavailable."""
    return FocusHistoryManager(db_enabled=False, clock=clock)


@pytest.fixture
def engine(qapp, clock, history):
    """Fresh CountdownEngine tracking sessions in history."""
    return CountdownEngine(parent=None, history=history, clock=clock)


@pytest.fixture
def engine_no_db(qapp, clock):
    """Fresh CountdownEngine with no history (pure state-machine tests)."""
    return CountdownEngine(parent=None, history=None, clock=clock)


@pytest.fixture
def recorder(engine, history):
    return SessionRecorder(engine, history, record_abandoned=True)
