"""Pytest configuration and shared fixtures for Habit Sprout tests.

Provides an isolated SQLite database per test, the storage stack built on top
of it, a tracker pinned to a fixed "today", and helpers for building
completion logs relative to a calendar window.
"""

from __future__ import annotations

from datetime import date

import pytest
from sqlmodel import Session, SQLModel, create_engine

from habitsprout import models  # noqa: F401  # register tables with SQLModel metadata
from habitsprout.infra.repositories import HabitStore, SQLModelKeyValueStore
from habitsprout.services.calendar import build_window
from habitsprout.services.tracker import HabitTracker

# A fixed day so window contents never depend on the wall clock.
REFERENCE_DAY = date(2026, 3, 15)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine(tmp_path):
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine with all tables created
    """
    engine = create_engine(f"sqlite:///{tmp_path / 'test.db'}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Return a factory of sessions, matching ``Callable[[], Session]`` repositories."""

    def factory():
        return Session(db_engine, expire_on_commit=False)

    return factory


@pytest.fixture
def kv_store(session_factory) -> SQLModelKeyValueStore:
    return SQLModelKeyValueStore(session_factory)


@pytest.fixture
def habit_store(kv_store) -> HabitStore:
    return HabitStore(kv_store)


@pytest.fixture
def reference_day() -> date:
    return REFERENCE_DAY


@pytest.fixture
def tracker(habit_store, reference_day) -> HabitTracker:
    """Tracker whose clock always reports ``reference_day``."""

    return HabitTracker(habit_store, clock=lambda: reference_day)


# =============================================================================
# Completion Log Helpers
# =============================================================================


@pytest.fixture
def window(reference_day):
    return build_window(reference_day)


@pytest.fixture
def log_factory(window):
    """Factory building a completion log from window indices (0 = oldest day).

    Returns:
        Callable: ``make(indices, value=True)`` returning a fresh dict
    """

    def _make(indices, value=True) -> dict:
        return {window[i].key: value for i in indices}

    return _make
