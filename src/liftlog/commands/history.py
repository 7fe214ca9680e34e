"""Workout history commands."""

from datetime import datetime

import click

from ..db import SettingsRepository, WorkoutRepository
from ..services import statistics
from ..services.workout_log import WorkoutLogService
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    get_db,
    handle_errors,
    match_id,
    short_id,
)


@click.group()
def history():
    """View and manage logged workouts."""


@history.command(name="list")
@click.option("--sets/--no-sets", default=False, help="Show individual sets")
@click.pass_context
@async_command
@handle_errors
async def list_history(ctx, sets: bool):
    """List logged workouts grouped by day, newest first."""
    ensure_initialized(ctx)

    db_path = get_db(ctx)
    entries = await WorkoutRepository(db_path).list_all()
    unit = await SettingsRepository(db_path).get_weight_unit()

    if not entries:
        echo_info("No workouts logged yet. Start one with 'liftlog workout start'")
        return

    for day, day_entries in statistics.group_by_day(entries):
        click.echo()
        click.echo(click.style(day.strftime("%A, %b %d, %Y"), bold=True))
        for entry in day_entries:
            name = entry.exercise_name or "(deleted exercise)"
            click.echo(
                f"  [{short_id(entry.id)}] {name}: {len(entry.sets)} sets, "
                f"{unit.format(entry.max_weight)} max"
            )
            if sets:
                for s in entry.sorted_sets:
                    warmup = " (warmup)" if s.is_warmup else ""
                    click.echo(
                        f"      Set {s.set_number}: {unit.format(s.weight)} x {s.reps}{warmup}"
                    )


@history.command()
@click.argument("entry_id", required=False)
@click.option(
    "--day",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    help="Delete every entry logged on this day (YYYY-MM-DD) instead",
)
@click.option("--force", "-f", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
@handle_errors
async def delete(ctx, entry_id: str | None, day: datetime | None, force: bool):
    """Delete one logged entry (id or id prefix) or a whole day of entries."""
    ensure_initialized(ctx)

    if (entry_id is None) == (day is None):
        raise click.UsageError("Give either ENTRY_ID or --day, not both")

    repo = WorkoutRepository(get_db(ctx))
    service = WorkoutLogService(repo)

    if day is not None:
        target = day.date()
        day_entries = dict(statistics.group_by_day(await repo.list_all())).get(target, [])
        if not day_entries:
            echo_info(f"No workouts logged on {target.isoformat()}")
            return
        if not force:
            click.echo(f"{target.strftime('%A, %b %d, %Y')}: {len(day_entries)} entries")
            if not click.confirm("Delete every entry from this day?"):
                echo_info("Cancelled")
                return
        deleted = await service.delete_day(target)
        echo_success(f"Deleted {deleted} entries from {target.isoformat()}")
        return

    matches = match_id(await repo.list_all(), entry_id)
    if not matches:
        echo_error(f"Entry {entry_id} not found")
        ctx.exit(1)
    if len(matches) > 1:
        echo_error(f"'{entry_id}' matches {len(matches)} entries; use a longer id")
        ctx.exit(1)

    entry = matches[0]
    name = entry.exercise_name or "(deleted exercise)"
    if not force:
        click.echo(f"{name} on {entry.date.strftime('%Y-%m-%d %H:%M')} ({len(entry.sets)} sets)")
        if not click.confirm("Delete this entry?"):
            echo_info("Cancelled")
            return

    await service.delete_entry(entry.id)
    echo_success(f"Deleted {name} entry")


@history.command()
@click.option("--force", "-f", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
@handle_errors
async def clear(ctx, force: bool):
    """Delete all workout history. Exercises and routines are kept."""
    ensure_initialized(ctx)

    if not force and not click.confirm(
        "This will permanently delete all workout entries and sets. Continue?"
    ):
        echo_info("Cancelled")
        return

    deleted = await WorkoutLogService(WorkoutRepository(get_db(ctx))).clear_history()
    echo_success(f"All workout history has been deleted ({deleted} entries)")
