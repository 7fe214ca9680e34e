"""Progress statistics commands."""

from datetime import datetime, timedelta

import click

from ..db import ExerciseRepository, SettingsRepository, WorkoutRepository
from ..models.workout import WorkoutEntry
from ..services import statistics
from ..services.statistics import DateRange
from .base import (
    async_command,
    echo_info,
    ensure_initialized,
    format_table,
    get_db,
    get_week_start,
    handle_errors,
    resolve_exercise,
)


@click.group()
def stats():
    """View progress statistics."""


async def _window_entries(
    repo: WorkoutRepository, window_days: int | None, now: datetime
) -> list[WorkoutEntry]:
    """Entries inside a trailing window, or the whole history for None."""
    if window_days is None:
        return await repo.list_all()
    return await repo.list_since(now - timedelta(days=window_days))


@stats.command()
@click.pass_context
@async_command
@handle_errors
async def summary(ctx):
    """Show workout days, streak, and this week's activity."""
    ensure_initialized(ctx)

    db_path = get_db(ctx)
    entries = await WorkoutRepository(db_path).list_all()
    unit = await SettingsRepository(db_path).get_weight_unit()
    result = statistics.summarize(entries, week_start=get_week_start(ctx))

    click.echo()
    click.echo(click.style("Progress", bold=True))
    click.echo("=" * 40)
    click.echo(f"Workout days:     {result.total_workout_days}")
    click.echo(f"This week:        {result.this_week_count}")
    click.echo(f"Current streak:   {result.current_streak} day(s)")
    click.echo(f"Total sets:       {result.total_sets}")
    click.echo(f"Volume this week: {unit.format(result.this_week_volume)}")

    recent = statistics.recent_entries(entries, limit=5)
    if recent:
        click.echo()
        click.echo(click.style("Recent", bold=True))
        for entry in recent:
            name = entry.exercise_name or "(deleted exercise)"
            click.echo(
                f"  {entry.date.strftime('%b %d')}  {name}: "
                f"{len(entry.sets)} sets, {unit.format(entry.max_weight)} max"
            )


@stats.command()
@click.pass_context
@async_command
@handle_errors
async def records(ctx):
    """List personal records, heaviest first."""
    ensure_initialized(ctx)

    db_path = get_db(ctx)
    entries = await WorkoutRepository(db_path).list_all()
    unit = await SettingsRepository(db_path).get_weight_unit()

    prs = statistics.personal_records(entries)
    if not prs:
        echo_info("No personal records yet.")
        return

    click.echo(format_table(["Exercise", "Best"], [[name, unit.format(w)] for name, w in prs]))


@stats.command()
@click.option("--days", "-d", type=click.IntRange(min=1), default=30, show_default=True)
@click.option("--all", "all_time", is_flag=True, help="Use the whole history")
@click.pass_context
@async_command
@handle_errors
async def trend(ctx, days: int, all_time: bool):
    """Show daily training volume over a trailing window."""
    ensure_initialized(ctx)

    db_path = get_db(ctx)
    now = datetime.now()
    window = None if all_time else days
    entries = await _window_entries(WorkoutRepository(db_path), window, now)
    unit = await SettingsRepository(db_path).get_weight_unit()

    points = statistics.trend(entries, window, now)
    if not points:
        echo_info("No workouts in this window.")
        return

    click.echo(
        format_table(
            ["Day", "Volume"],
            [[day.isoformat(), unit.format(vol)] for day, vol in points],
        )
    )


@stats.command()
@click.option("--days", "-d", type=click.IntRange(min=1), default=30, show_default=True)
@click.option("--all", "all_time", is_flag=True, help="Use the whole history")
@click.option("--limit", "-n", type=click.IntRange(min=1), default=10, show_default=True)
@click.pass_context
@async_command
@handle_errors
async def top(ctx, days: int, all_time: bool, limit: int):
    """Show the heaviest lifts per exercise in a trailing window."""
    ensure_initialized(ctx)

    db_path = get_db(ctx)
    now = datetime.now()
    window = None if all_time else days
    entries = await _window_entries(WorkoutRepository(db_path), window, now)
    unit = await SettingsRepository(db_path).get_weight_unit()

    lifts = statistics.top_lifts(entries, window, now)[:limit]
    if not lifts:
        echo_info("No lifts in this window.")
        return

    click.echo(format_table(["Exercise", "Heaviest"], [[n, unit.format(w)] for n, w in lifts]))


@stats.command()
@click.argument("exercise")
@click.option(
    "--range",
    "-r",
    "date_range",
    type=click.Choice([r.value for r in DateRange], case_sensitive=False),
    default=DateRange.MONTH.value,
    show_default=True,
)
@click.pass_context
@async_command
@handle_errors
async def exercise(ctx, exercise: str, date_range: str):
    """Show an exercise's max weight and volume over time."""
    ensure_initialized(ctx)

    db_path = get_db(ctx)
    found = await resolve_exercise(ExerciseRepository(db_path), exercise)
    entries = await WorkoutRepository(db_path).list_for_exercise(found.id)
    unit = await SettingsRepository(db_path).get_weight_unit()

    points = statistics.exercise_progress(entries, DateRange(date_range))
    click.echo()
    click.echo(click.style(f"{found.name} ({date_range})", bold=True))
    if not points:
        echo_info("No data in this range.")
        return

    click.echo(
        format_table(
            ["Date", "Max", "Volume"],
            [
                [p.date.strftime("%Y-%m-%d"), unit.format(p.max_weight), f"{p.volume:g}"]
                for p in points
            ],
        )
    )
    click.echo()
    click.echo(f"Sessions: {len(points)}")
    click.echo(f"Best: {unit.format(max(p.max_weight for p in points))}")
    click.echo(f"Avg volume: {int(statistics.average_volume(points))}")
