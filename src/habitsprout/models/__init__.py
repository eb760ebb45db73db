"""SQLModel exports."""

from .habit import DEFAULT_ICON, Habit
from .storage import StorageEntry

__all__ = [
    "DEFAULT_ICON",
    "Habit",
    "StorageEntry",
]
