"""SQLModel implementation of the key-value store."""

from __future__ import annotations

from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ...errors import StorageError
from ...logging_config import get_logger
from ...models.storage import StorageEntry

logger = get_logger(__name__)


class SQLModelKeyValueStore:
    """Key-value store persisted in the ``storage_entry`` table."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        with self.session_factory() as session:
            entry = session.exec(select(StorageEntry).where(StorageEntry.key == key)).first()
            return entry.value if entry else None

    def set(self, key: str, value: str) -> None:
        try:
            with self.session_factory() as session:
                entry = session.exec(select(StorageEntry).where(StorageEntry.key == key)).first()
                if entry:
                    entry.value = value
                else:
                    entry = StorageEntry(key=key, value=value)
                session.add(entry)
                session.commit()
        except SQLAlchemyError as exc:
            logger.error("Failed to write storage entry", extra={"key": key})
            raise StorageError(f"Could not save {key!r}") from exc

    def delete(self, key: str) -> None:
        try:
            with self.session_factory() as session:
                entry = session.exec(select(StorageEntry).where(StorageEntry.key == key)).first()
                if entry:
                    session.delete(entry)
                    session.commit()
        except SQLAlchemyError as exc:
            logger.error("Failed to delete storage entry", extra={"key": key})
            raise StorageError(f"Could not delete {key!r}") from exc


__all__ = ["SQLModelKeyValueStore"]
