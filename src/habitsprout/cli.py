"""Command line interface for Habit Sprout."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from datetime import date

import click

from .config import BaseConfig
from .errors import HabitSproutError, InvalidReferenceDate
from .infra.database import bootstrap_database
from .infra.repositories import HabitStore, SQLModelKeyValueStore
from .logging_config import setup_logging
from .services.calendar import normalize_reference
from .services.heatmap import HeatmapCell
from .services.tracker import HabitCard, HabitTracker


class ReferenceDateParam(click.ParamType):
    """Click parameter accepting a ``YYYY-MM-DD`` reference day."""

    name = "date"

    def convert(self, value, param, ctx) -> date:
        if isinstance(value, date):
            return value
        try:
            return normalize_reference(value)
        except InvalidReferenceDate as exc:
            self.fail(str(exc), param, ctx)


REFERENCE_DATE = ReferenceDateParam()

today_option = click.option(
    "--today",
    type=REFERENCE_DATE,
    default=None,
    help="Treat this day (YYYY-MM-DD) as today.",
)


def build_tracker(config: BaseConfig | None = None, *, verbose: bool = False) -> HabitTracker:
    """Wire logging, storage and the tracker service from configuration.

    The console only shows warnings unless ``verbose`` is set; the log file
    always receives the configured level.
    """

    cfg = config or BaseConfig()
    setup_logging(cfg, console_level=None if verbose else logging.WARNING)
    _, session_factory = bootstrap_database(cfg)
    return HabitTracker(HabitStore(SQLModelKeyValueStore(session_factory)))


def heatmap_strip(cells: tuple[HeatmapCell, ...]) -> str:
    """One character per day: ``#`` done, ``.`` missed, ``@``/``o`` for today."""

    chars = []
    for cell in cells:
        if cell.is_today:
            chars.append("@" if cell.completed else "o")
        else:
            chars.append("#" if cell.completed else ".")
    return "".join(chars)


def format_card(card: HabitCard) -> str:
    stats = card.stats
    status = "done" if card.completed_today else "open"
    return "\n".join(
        [
            f"{card.habit.icon} {card.habit.title}  [{card.habit.id}]",
            (
                f"  {stats.completed_days}/{stats.total_days} days"
                f" | {stats.completion_percentage}%"
                f" | {stats.longest_streak} day best"
                f" | {stats.current_streak} day streak"
                f" | today: {status}"
            ),
            f"  {heatmap_strip(card.cells)}",
        ]
    )


def _run(action):
    try:
        return action()
    except HabitSproutError as exc:
        raise click.ClickException(str(exc)) from exc


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Echo info logs to stderr.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Track daily habits over a rolling 30-day window."""

    if ctx.obj is None:
        ctx.obj = build_tracker(verbose=verbose)


@cli.command("add")
@click.argument("title")
@click.option("--icon", default=None, help="Emoji shown next to the habit.")
@click.pass_obj
def add_habit(tracker: HabitTracker, title: str, icon: str | None) -> None:
    """Create a new habit."""

    habit = _run(lambda: tracker.create_habit(title, icon))
    click.echo(f"Created {habit.icon} {habit.title} [{habit.id}]")


@cli.command("edit")
@click.argument("habit_id")
@click.option("--title", default=None, help="New habit name.")
@click.option("--icon", default=None, help="New emoji.")
@click.pass_obj
def edit_habit(tracker: HabitTracker, habit_id: str, title: str | None, icon: str | None) -> None:
    """Rename a habit or change its icon."""

    if title is None and icon is None:
        raise click.UsageError("Nothing to change; pass --title and/or --icon.")
    habit = _run(lambda: tracker.update_habit(habit_id, title=title, icon=icon))
    click.echo(f"Updated {habit.icon} {habit.title} [{habit.id}]")


@cli.command("delete")
@click.argument("habit_id")
@click.option("--yes", is_flag=True, default=False, help="Skip the confirmation prompt.")
@click.pass_obj
def delete_habit(tracker: HabitTracker, habit_id: str, yes: bool) -> None:
    """Delete a habit and its whole history."""

    if not yes:
        click.confirm(
            "Delete this habit? This will permanently remove its history.",
            abort=True,
        )
    _run(lambda: tracker.delete_habit(habit_id))
    click.echo(f"Deleted {habit_id}")


@cli.command("toggle")
@click.argument("habit_id")
@today_option
@click.pass_obj
def toggle_habit(tracker: HabitTracker, habit_id: str, today: date | None) -> None:
    """Flip today's completion for a habit."""

    completed = _run(lambda: tracker.toggle_today(habit_id, today=today))
    click.echo(f"{habit_id}: {'completed' if completed else 'not completed'} today")


@cli.command("list")
@today_option
@click.pass_obj
def list_habits(tracker: HabitTracker, today: date | None) -> None:
    """Show every habit with its stats and 30-day heatmap."""

    cards = _run(lambda: tracker.cards(today=today))
    if not cards:
        click.echo("No habits yet. Add one with `habitsprout add NAME`.")
        return
    click.echo("\n\n".join(format_card(card) for card in cards))


@cli.command("stats")
@click.argument("habit_id")
@today_option
@click.option("--json", "as_json", is_flag=True, default=False, help="Emit JSON.")
@click.pass_obj
def habit_stats(tracker: HabitTracker, habit_id: str, today: date | None, as_json: bool) -> None:
    """Show completion and streak statistics for one habit."""

    card = _run(lambda: tracker.card_for(habit_id, today=today))
    if as_json:
        payload = {"habit_id": habit_id, **asdict(card.stats)}
        click.echo(json.dumps(payload))
        return
    click.echo(format_card(card))


def main() -> None:
    cli(prog_name="habitsprout")


if __name__ == "__main__":  # pragma: no cover
    main()
