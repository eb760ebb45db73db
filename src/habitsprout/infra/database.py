"""SQLite engine and session wiring for the key-value store."""

from __future__ import annotations

from typing import Callable, Mapping, Tuple

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from ..config import BaseConfig
from ..logging_config import get_logger

logger = get_logger(__name__)


def _apply_sqlite_pragmas(engine: Engine, pragmas: Mapping[str, str]) -> None:
    """Run ``PRAGMA name=value`` on every new SQLite connection."""

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, _connection_record) -> None:
        cursor = dbapi_connection.cursor()
        try:
            for name, value in pragmas.items():
                cursor.execute(f"PRAGMA {name}={value}")
        finally:
            cursor.close()


def create_db_engine(config: BaseConfig) -> Engine:
    """Create the engine; SQLite URLs get the configured pragmas."""

    engine = create_engine(config.DATABASE_URL, **config.sqlalchemy_engine_options())
    if engine.dialect.name == "sqlite" and config.SQLITE_PRAGMAS:
        _apply_sqlite_pragmas(engine, config.SQLITE_PRAGMAS)
    return engine


def init_database(engine: Engine) -> None:
    """Create the ``storage_entry`` table if it does not exist yet."""

    from .. import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.debug(
        "Database schema ready",
        extra={"url": engine.url.render_as_string(hide_password=True)},
    )


def create_session_factory(engine: Engine) -> Callable[[], Session]:
    """Return a factory of plain sessions; the stores commit their own writes."""

    def factory() -> Session:
        return Session(engine, expire_on_commit=False)

    return factory


def bootstrap_database(config: BaseConfig | None = None) -> Tuple[Engine, Callable[[], Session]]:
    """Create the engine, ensure the schema exists, and return (engine, session_factory)."""

    cfg = config or BaseConfig()
    engine = create_db_engine(cfg)
    init_database(engine)
    return engine, create_session_factory(engine)


__all__ = ["bootstrap_database", "create_db_engine", "create_session_factory", "init_database"]
