"""Habit lifecycle and habit-card assembly."""

from __future__ import annotations

import secrets
import string
import time
from dataclasses import dataclass
from datetime import date
from typing import Callable

from ..errors import HabitNotFoundError, HabitValidationError
from ..infra.repositories.habit import HabitStore
from ..logging_config import get_logger
from ..models.habit import (
    DEFAULT_ICON,
    ICON_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    TITLE_MIN_LENGTH,
    Habit,
)
from .calendar import ReferenceDate, build_window, date_key, normalize_reference
from .habits import HabitStats, compute_stats, is_completed
from .heatmap import HeatmapCell, render_heatmap

logger = get_logger(__name__)

_ID_ALPHABET = string.digits + string.ascii_lowercase


@dataclass(frozen=True, slots=True)
class HabitCard:
    """Everything needed to display one habit."""

    habit: Habit
    completed_today: bool
    stats: HabitStats
    cells: tuple[HeatmapCell, ...]


def generate_habit_id(now: float | None = None) -> str:
    """Return ``habit_<epoch millis>_<9 random base-36 chars>``."""

    millis = int((time.time() if now is None else now) * 1000)
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"habit_{millis}_{suffix}"


def validate_title(title: str | None) -> str:
    """Return the trimmed title or raise ``HabitValidationError``."""

    cleaned = (title or "").strip()
    if not cleaned:
        raise HabitValidationError("Habit name is required")
    if len(cleaned) < TITLE_MIN_LENGTH:
        raise HabitValidationError(f"Habit name must be at least {TITLE_MIN_LENGTH} characters")
    if len(cleaned) > TITLE_MAX_LENGTH:
        raise HabitValidationError(f"Habit name must be less than {TITLE_MAX_LENGTH} characters")
    return cleaned


def validate_icon(icon: str | None) -> str | None:
    """Return the trimmed icon, None when blank, or raise ``HabitValidationError``."""

    cleaned = (icon or "").strip()
    if not cleaned:
        return None
    if len(cleaned) > ICON_MAX_LENGTH:
        raise HabitValidationError(
            f"Habit icon must be at most {ICON_MAX_LENGTH} characters", field="icon"
        )
    return cleaned


def _build_habit(data: dict) -> Habit:
    try:
        return Habit.model_validate(data)
    except ValueError as exc:
        raise HabitValidationError(f"Invalid habit: {exc}") from exc


class HabitTracker:
    """Creates, edits, deletes and toggles habits, and builds their cards."""

    def __init__(self, store: HabitStore, *, clock: Callable[[], date] = date.today):
        self.store = store
        self.clock = clock

    def _today(self, today: ReferenceDate | None) -> date:
        return normalize_reference(self.clock() if today is None else today)

    def _require(self, habit_id: str) -> Habit:
        habit = self.store.get_habit(habit_id)
        if habit is None:
            raise HabitNotFoundError(habit_id)
        return habit

    def list_habits(self) -> list[Habit]:
        return self.store.get_habits()

    def create_habit(self, title: str, icon: str | None = None) -> Habit:
        habit = _build_habit(
            {
                "id": generate_habit_id(),
                "title": validate_title(title),
                "icon": validate_icon(icon) or DEFAULT_ICON,
            }
        )
        self.store.save_habit(habit)
        logger.info("Habit created", extra={"habit_id": habit.id})
        return habit

    def update_habit(
        self, habit_id: str, *, title: str | None = None, icon: str | None = None
    ) -> Habit:
        habit = self._require(habit_id)
        changes = {}
        if title is not None:
            changes["title"] = validate_title(title)
        cleaned_icon = validate_icon(icon)
        if cleaned_icon:
            changes["icon"] = cleaned_icon
        # The merged record must pass model validation before it is written.
        updated = _build_habit({**habit.model_dump(), **changes})
        self.store.update_habit(updated)
        logger.info("Habit updated", extra={"habit_id": habit_id, "fields": sorted(changes)})
        return updated

    def delete_habit(self, habit_id: str) -> None:
        self._require(habit_id)
        self.store.delete_habit(habit_id)
        self.store.delete_logs(habit_id)
        logger.info("Habit deleted", extra={"habit_id": habit_id})

    def toggle_today(self, habit_id: str, *, today: ReferenceDate | None = None) -> bool:
        """Flip today's completion for a habit and return the new state."""

        self._require(habit_id)
        key = date_key(self._today(today))
        logs = self.store.get_logs(habit_id)
        logs[key] = not is_completed(logs, key)
        self.store.save_logs(habit_id, logs)
        logger.info(
            "Habit toggled",
            extra={"habit_id": habit_id, "day": key, "completed": logs[key]},
        )
        return logs[key]

    def card(self, habit: Habit, *, today: ReferenceDate | None = None) -> HabitCard:
        reference = self._today(today)
        logs = self.store.get_logs(habit.id)
        window = build_window(reference)
        return HabitCard(
            habit=habit,
            completed_today=is_completed(logs, date_key(reference)),
            stats=compute_stats(logs, window),
            cells=render_heatmap(logs, window),
        )

    def card_for(self, habit_id: str, *, today: ReferenceDate | None = None) -> HabitCard:
        return self.card(self._require(habit_id), today=today)

    def cards(self, *, today: ReferenceDate | None = None) -> list[HabitCard]:
        reference = self._today(today)
        return [self.card(habit, today=reference) for habit in self.store.get_habits()]


__all__ = [
    "HabitCard",
    "HabitTracker",
    "generate_habit_id",
    "validate_icon",
    "validate_title",
]
