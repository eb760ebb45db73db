"""Tests for the habitsprout command line."""

from __future__ import annotations

import json
import logging
import logging.handlers

import pytest
from click.testing import CliRunner

from habitsprout.cli import build_tracker, cli, heatmap_strip
from habitsprout.config import TestConfig
from habitsprout.services.heatmap import render_heatmap


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def invoke(runner, tracker):
    """Run a CLI command against the test tracker."""

    def _invoke(*args, input=None):
        return runner.invoke(cli, list(args), obj=tracker, input=input)

    return _invoke


def test_list_empty(invoke):
    result = invoke("list")
    assert result.exit_code == 0
    assert "No habits yet" in result.output


def test_add_then_list(invoke, tracker):
    result = invoke("add", "Drink water", "--icon", "💧")
    assert result.exit_code == 0
    assert "Created 💧 Drink water" in result.output

    habit = tracker.list_habits()[0]
    listing = invoke("list")
    assert habit.id in listing.output
    assert "0/30 days | 0% | 0 day best | 0 day streak | today: open" in listing.output
    assert "." * 29 + "o" in listing.output


def test_add_invalid_title(invoke):
    result = invoke("add", "x")
    assert result.exit_code == 1
    assert "at least 2 characters" in result.output


def test_toggle_and_stats_json(invoke, tracker):
    habit = tracker.create_habit("Stretch")
    result = invoke("toggle", habit.id)
    assert result.exit_code == 0
    assert "completed today" in result.output

    stats = invoke("stats", habit.id, "--json")
    assert stats.exit_code == 0
    payload = json.loads(stats.output)
    assert payload == {
        "habit_id": habit.id,
        "total_days": 30,
        "completed_days": 1,
        "completion_percentage": 3,
        "current_streak": 1,
        "longest_streak": 1,
    }


def test_stats_with_explicit_today(invoke, tracker):
    habit = tracker.create_habit("Stretch")
    invoke("toggle", habit.id, "--today", "2026-03-14")
    invoke("toggle", habit.id, "--today", "2026-03-15")

    payload = json.loads(invoke("stats", habit.id, "--today", "2026-03-15", "--json").output)
    assert payload["current_streak"] == 2

    later = json.loads(invoke("stats", habit.id, "--today", "2026-03-17", "--json").output)
    assert later["current_streak"] == 0
    assert later["longest_streak"] == 2


def test_stats_text_output(invoke, tracker):
    habit = tracker.create_habit("Stretch")
    invoke("toggle", habit.id)
    result = invoke("stats", habit.id)
    assert "1/30 days | 3% | 1 day best | 1 day streak | today: done" in result.output
    assert result.output.rstrip().endswith("@")


def test_invalid_today_rejected(invoke, tracker):
    habit = tracker.create_habit("Stretch")
    result = invoke("toggle", habit.id, "--today", "tomorrow")
    assert result.exit_code == 2
    assert "Unparseable reference date" in result.output


def test_unknown_habit(invoke):
    result = invoke("stats", "habit_missing")
    assert result.exit_code == 1
    assert "Habit not found: habit_missing" in result.output


def test_edit(invoke, tracker):
    habit = tracker.create_habit("Stretch")
    result = invoke("edit", habit.id, "--title", "Stretch daily")
    assert result.exit_code == 0
    assert tracker.list_habits()[0].title == "Stretch daily"


def test_edit_requires_a_change(invoke, tracker):
    habit = tracker.create_habit("Stretch")
    result = invoke("edit", habit.id)
    assert result.exit_code == 2


def test_delete_prompts_for_confirmation(invoke, tracker):
    habit = tracker.create_habit("Stretch")

    aborted = invoke("delete", habit.id, input="n\n")
    assert aborted.exit_code == 1
    assert len(tracker.list_habits()) == 1

    confirmed = invoke("delete", habit.id, input="y\n")
    assert confirmed.exit_code == 0
    assert tracker.list_habits() == []


def test_delete_with_yes_flag(invoke, tracker):
    habit = tracker.create_habit("Stretch")
    result = invoke("delete", habit.id, "--yes")
    assert result.exit_code == 0
    assert f"Deleted {habit.id}" in result.output


def test_heatmap_strip(window, log_factory):
    cells = render_heatmap(log_factory([0, 28, 29]), window)
    assert heatmap_strip(cells) == "#" + "." * 26 + "#@"


def test_add_rejects_long_icon(invoke, tracker):
    result = invoke("add", "Read", "--icon", "x" * 17)
    assert result.exit_code == 1
    assert "at most 16 characters" in result.output
    assert tracker.list_habits() == []


def test_edit_rejects_long_icon(invoke, tracker):
    habit = tracker.create_habit("Read", "📖")
    result = invoke("edit", habit.id, "--icon", "x" * 17)
    assert result.exit_code == 1
    assert "at most 16 characters" in result.output

    listing = invoke("list")
    assert f"📖 Read  [{habit.id}]" in listing.output


def _console_handler(logger: logging.Logger) -> logging.Handler:
    return next(
        handler
        for handler in logger.handlers
        if isinstance(handler, logging.StreamHandler)
        and not isinstance(handler, logging.handlers.RotatingFileHandler)
    )


@pytest.fixture
def restore_logger():
    logger = logging.getLogger("habitsprout")
    saved = (list(logger.handlers), logger.level)
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in saved[0]:
        logger.addHandler(handler)
    logger.setLevel(saved[1])


@pytest.mark.parametrize(("verbose", "expected"), [(False, logging.WARNING), (True, logging.INFO)])
def test_console_shows_info_only_when_verbose(tmp_path, restore_logger, verbose, expected):
    config = TestConfig(tmp_path)
    config.DEV_MODE = True

    build_tracker(config, verbose=verbose)

    assert _console_handler(restore_logger).level == expected
