"""Concrete repository implementations using SQLModel."""

from .habit import HABITS_KEY, HabitStore, logs_key
from .storage import SQLModelKeyValueStore

__all__ = [
    "HABITS_KEY",
    "HabitStore",
    "SQLModelKeyValueStore",
    "logs_key",
]
