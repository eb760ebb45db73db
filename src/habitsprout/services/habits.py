"""Completion and streak statistics over a calendar window."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Mapping, Sequence

from .calendar import Day, ReferenceDate, build_window

CompletionLog = Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class CompletionStats:
    total_days: int
    completed_days: int
    completion_percentage: int


@dataclass(frozen=True, slots=True)
class HabitStats:
    """All statistics shown on a habit card."""

    total_days: int
    completed_days: int
    completion_percentage: int
    current_streak: int
    longest_streak: int


def is_completed(log: CompletionLog, key: str) -> bool:
    """Return True only for an explicit ``True``; absent or malformed values count as missed."""

    return log.get(key) is True


def percentage(completed: int, total: int) -> int:
    """Return ``completed / total`` as a whole percentage, rounding halves up."""

    if total <= 0:
        return 0
    value = Decimal(completed * 100) / Decimal(total)
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _resolve(window: Sequence[Day] | None, today: ReferenceDate | None) -> Sequence[Day]:
    return build_window(today) if window is None else window


def completion_stats(
    log: CompletionLog,
    window: Sequence[Day] | None = None,
    *,
    today: ReferenceDate | None = None,
) -> CompletionStats:
    """Count completed days in the window and the matching percentage."""

    days = _resolve(window, today)
    completed = sum(1 for day in days if is_completed(log, day.key))
    return CompletionStats(
        total_days=len(days),
        completed_days=completed,
        completion_percentage=percentage(completed, len(days)),
    )


def current_streak(
    log: CompletionLog,
    window: Sequence[Day] | None = None,
    *,
    today: ReferenceDate | None = None,
) -> int:
    """Return the unbroken run of completed days ending on the newest window day."""

    streak = 0
    for day in reversed(_resolve(window, today)):
        if not is_completed(log, day.key):
            break
        streak += 1
    return streak


def longest_streak(
    log: CompletionLog,
    window: Sequence[Day] | None = None,
    *,
    today: ReferenceDate | None = None,
) -> int:
    """Return the longest run of consecutive completed days anywhere in the window."""

    run = 0
    longest = 0
    for day in _resolve(window, today):
        if is_completed(log, day.key):
            run += 1
            longest = max(longest, run)
        else:
            run = 0
    return longest


def compute_stats(
    log: CompletionLog,
    window: Sequence[Day] | None = None,
    *,
    today: ReferenceDate | None = None,
) -> HabitStats:
    """Build the window once and derive every statistic from it."""

    days = _resolve(window, today)
    summary = completion_stats(log, days)
    return HabitStats(
        total_days=summary.total_days,
        completed_days=summary.completed_days,
        completion_percentage=summary.completion_percentage,
        current_streak=current_streak(log, days),
        longest_streak=longest_streak(log, days),
    )


__all__ = [
    "CompletionLog",
    "CompletionStats",
    "HabitStats",
    "completion_stats",
    "compute_stats",
    "current_streak",
    "is_completed",
    "longest_streak",
    "percentage",
]
