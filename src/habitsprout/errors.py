"""Exception types raised by Habit Sprout."""

from __future__ import annotations


class HabitSproutError(Exception):
    """Base class for application errors."""


class InvalidReferenceDate(HabitSproutError, ValueError):
    """Raised when a reference date cannot be turned into a calendar day."""


class HabitValidationError(HabitSproutError, ValueError):
    """Raised when a habit record fails validation."""

    def __init__(self, message: str, *, field: str = "title") -> None:
        super().__init__(message)
        self.field = field


class HabitNotFoundError(HabitSproutError, LookupError):
    """Raised when a habit id does not match any stored habit."""

    def __init__(self, habit_id: str) -> None:
        super().__init__(f"Habit not found: {habit_id}")
        self.habit_id = habit_id


class StorageError(HabitSproutError):
    """Raised when a write to the key-value store fails."""


__all__ = [
    "HabitNotFoundError",
    "HabitSproutError",
    "HabitValidationError",
    "InvalidReferenceDate",
    "StorageError",
]
