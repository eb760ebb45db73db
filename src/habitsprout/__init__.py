"""Habit Sprout: daily habit tracking with a rolling 30-day history."""

from __future__ import annotations

from .config import WINDOW_DAYS, BaseConfig, DevConfig

__all__ = ["BaseConfig", "DevConfig", "WINDOW_DAYS"]
