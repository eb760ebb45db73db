"""Key-value rows backing habit and log persistence."""

from __future__ import annotations

from typing import ClassVar

from sqlmodel import Field, SQLModel


class StorageEntry(SQLModel, table=True):
    """One JSON document stored under a string key."""

    __tablename__: ClassVar[str] = "storage_entry"

    key: str = Field(primary_key=True, max_length=128)
    value: str = Field(nullable=False)
