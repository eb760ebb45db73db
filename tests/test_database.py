"""Tests for engine and session bootstrap."""

from __future__ import annotations

from sqlalchemy import inspect
from sqlmodel import Session

from habitsprout.config import TestConfig
from habitsprout.infra.database import bootstrap_database, create_db_engine
from habitsprout.infra.repositories import HabitStore, SQLModelKeyValueStore


def test_bootstrap_creates_storage_table(tmp_path):
    engine, _ = bootstrap_database(TestConfig(tmp_path))
    try:
        assert "storage_entry" in inspect(engine).get_table_names()
    finally:
        engine.dispose()


def test_session_factory_persists_across_stores(tmp_path):
    engine, session_factory = bootstrap_database(TestConfig(tmp_path))
    try:
        HabitStore(SQLModelKeyValueStore(session_factory)).save_logs("a", {"2026-03-15": True})
        reopened = HabitStore(SQLModelKeyValueStore(session_factory))
        assert reopened.get_logs("a") == {"2026-03-15": True}
    finally:
        engine.dispose()


def test_sqlite_connections_use_wal(tmp_path):
    engine = create_db_engine(TestConfig(tmp_path))
    try:
        with engine.connect() as connection:
            assert connection.exec_driver_sql("PRAGMA journal_mode").scalar() == "wal"
            assert connection.exec_driver_sql("PRAGMA busy_timeout").scalar() == 5000
    finally:
        engine.dispose()


def test_session_factory_returns_fresh_sessions(tmp_path):
    engine, session_factory = bootstrap_database(TestConfig(tmp_path))
    try:
        first, second = session_factory(), session_factory()
        assert isinstance(first, Session)
        assert first is not second
        first.close()
        second.close()
    finally:
        engine.dispose()
