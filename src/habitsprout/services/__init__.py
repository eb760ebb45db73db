"""Service module exports."""

from . import calendar, habits, heatmap, tracker

__all__ = [
    "calendar",
    "habits",
    "heatmap",
    "tracker",
]
