"""Heatmap cells for the 30-day history grid."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .calendar import Day, ReferenceDate, build_window
from .habits import CompletionLog, is_completed

MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


@dataclass(frozen=True, slots=True)
class HeatmapCell:
    """Display state of a single day in the heatmap grid."""

    key: str
    day_of_month: int
    month: str
    completed: bool
    is_today: bool
    is_future: bool

    @property
    def classes(self) -> tuple[str, ...]:
        names = ["heatmap-day"]
        if self.completed:
            names.append("completed")
        if self.is_today:
            names.append("today")
        if self.is_future:
            names.append("future")
        return tuple(names)

    @property
    def title(self) -> str:
        """Tooltip text, e.g. ``Oct 19 - Completed (Today)``."""

        text = f"{self.month} {self.day_of_month}"
        if self.completed:
            text += " - Completed"
        if self.is_today:
            text += " (Today)"
        return text


def render_heatmap(
    log: CompletionLog,
    window: Sequence[Day] | None = None,
    *,
    today: ReferenceDate | None = None,
) -> tuple[HeatmapCell, ...]:
    """Project a completion log onto one cell per window day."""

    days = build_window(today) if window is None else window
    return tuple(
        HeatmapCell(
            key=day.key,
            day_of_month=day.on.day,
            month=MONTH_NAMES[day.on.month - 1],
            completed=is_completed(log, day.key),
            is_today=day.is_today,
            is_future=day.is_future,
        )
        for day in days
    )


__all__ = ["HeatmapCell", "MONTH_NAMES", "render_heatmap"]
