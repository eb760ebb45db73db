"""Habit list and per-habit completion logs on top of a key-value store."""

from __future__ import annotations

import json
from typing import Any, Mapping

from ...domain.repositories.storage import KeyValueStore
from ...logging_config import get_logger
from ...models.habit import Habit

logger = get_logger(__name__)

HABITS_KEY = "habits"


def logs_key(habit_id: str) -> str:
    """Storage key holding the completion log of one habit."""

    return f"logs:{habit_id}"


class HabitStore:
    """Reads and writes habits and their logs as JSON documents.

    Reads never raise on bad data: a missing or corrupt document is logged and
    treated as empty. Write failures surface as ``StorageError`` from the
    underlying store.
    """

    def __init__(self, kv: KeyValueStore):
        self.kv = kv

    def _load(self, key: str):
        raw = self.kv.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.exception("Corrupt storage entry", extra={"key": key})
            return None

    def get_habits(self) -> list[Habit]:
        data = self._load(HABITS_KEY)
        if not isinstance(data, list):
            if data is not None:
                logger.error("Habit list is not a JSON array", extra={"key": HABITS_KEY})
            return []

        habits: list[Habit] = []
        for item in data:
            try:
                habits.append(Habit.model_validate(item))
            except (TypeError, ValueError):
                logger.error("Skipping malformed habit record", extra={"record": item})
        return habits

    def get_habit(self, habit_id: str) -> Habit | None:
        return next((h for h in self.get_habits() if h.id == habit_id), None)

    def _write_habits(self, habits: list[Habit]) -> None:
        payload = [habit.model_dump(mode="json") for habit in habits]
        self.kv.set(HABITS_KEY, json.dumps(payload, ensure_ascii=False))

    def save_habit(self, habit: Habit) -> Habit:
        """Insert the habit, or replace the stored habit with the same id in place."""

        habits = self.get_habits()
        for index, existing in enumerate(habits):
            if existing.id == habit.id:
                habits[index] = habit
                break
        else:
            habits.append(habit)
        self._write_habits(habits)
        return habit

    def update_habit(self, habit: Habit) -> Habit:
        return self.save_habit(habit)

    def delete_habit(self, habit_id: str) -> None:
        habits = self.get_habits()
        remaining = [h for h in habits if h.id != habit_id]
        if len(remaining) != len(habits):
            self._write_habits(remaining)

    def get_logs(self, habit_id: str) -> dict[str, Any]:
        """Return the raw stored log; values are normalized later by ``is_completed``."""

        key = logs_key(habit_id)
        data = self._load(key)
        if not isinstance(data, dict):
            if data is not None:
                logger.error("Completion log is not a JSON object", extra={"key": key})
            return {}
        return data

    def save_logs(self, habit_id: str, logs: Mapping[str, bool]) -> None:
        self.kv.set(logs_key(habit_id), json.dumps(dict(logs), sort_keys=True))

    def delete_logs(self, habit_id: str) -> None:
        self.kv.delete(logs_key(habit_id))


__all__ = ["HABITS_KEY", "HabitStore", "logs_key"]
