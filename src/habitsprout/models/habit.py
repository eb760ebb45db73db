"""Habit records kept in the ``habits`` storage entry."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlmodel import Field, SQLModel

DEFAULT_ICON = "📚"
TITLE_MIN_LENGTH = 2
TITLE_MAX_LENGTH = 50
ICON_MAX_LENGTH = 16


class Habit(SQLModel):
    """A user-defined habit tracked once per calendar day."""

    id: str = Field(max_length=64)
    title: str
    icon: str = Field(default=DEFAULT_ICON, max_length=ICON_MAX_LENGTH)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
