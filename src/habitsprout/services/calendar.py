"""Rolling calendar window used as the statistics horizon.

Every habit card looks at the same fixed number of most recent calendar days,
oldest first, ending on the reference day. Days are identified by their ISO
``YYYY-MM-DD`` key, which is also the key format of persisted completion logs.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Union

from ..config import WINDOW_DAYS
from ..errors import InvalidReferenceDate

ReferenceDate = Union[date, datetime, str]


@dataclass(frozen=True, slots=True)
class Day:
    """One calendar day inside a window."""

    key: str
    on: date
    is_today: bool
    is_future: bool


def date_key(day: date) -> str:
    """Return the canonical ``YYYY-MM-DD`` key for a calendar day."""

    return day.isoformat()


def normalize_reference(reference: ReferenceDate | None = None) -> date:
    """Reduce a reference instant to a local calendar date.

    ``None`` means the current local date. Aware datetimes are converted to the
    process local timezone before the time of day is discarded.
    """

    if reference is None:
        return date.today()
    if isinstance(reference, datetime):
        if reference.tzinfo is not None:
            reference = reference.astimezone()
        return reference.date()
    if isinstance(reference, date):
        return reference
    if isinstance(reference, str):
        text = reference.strip()
        try:
            if len(text) == 10:
                return date.fromisoformat(text)
            return normalize_reference(datetime.fromisoformat(text))
        except ValueError as exc:
            raise InvalidReferenceDate(f"Unparseable reference date: {reference!r}") from exc
    raise InvalidReferenceDate(f"Unsupported reference date type: {type(reference).__name__}")


def build_window(
    reference: ReferenceDate | None = None, *, days: int = WINDOW_DAYS
) -> tuple[Day, ...]:
    """Return the ``days`` most recent calendar days ending on ``reference``."""

    if days < 0:
        raise InvalidReferenceDate(f"Window length must be non-negative, got {days}")

    today = normalize_reference(reference)
    window = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        window.append(
            Day(
                key=date_key(day),
                on=day,
                is_today=day == today,
                is_future=day > today,
            )
        )
    return tuple(window)


__all__ = ["Day", "ReferenceDate", "build_window", "date_key", "normalize_reference"]
