"""Exercise library commands."""

import click

from ..data.seed import CATEGORIES
from ..db import ExerciseRepository, SettingsRepository, WorkoutRepository
from ..models.exercise import Exercise, group_by_category
from ..services import statistics
from .base import (
    async_command,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
    get_db,
    handle_errors,
    resolve_exercise,
    short_id,
)


@click.group()
def exercises():
    """Manage the exercise library."""


@exercises.command(name="list")
@click.option("--search", "-s", "query", default="", help="Filter by name")
@click.pass_context
@async_command
@handle_errors
async def list_exercises(ctx, query: str):
    """List exercises grouped by category."""
    ensure_initialized(ctx)

    db_path = get_db(ctx)
    repo = ExerciseRepository(db_path)

    query = query.strip()
    if query:
        grouped = group_by_category(await repo.search(query))
    else:
        grouped = await repo.grouped_by_category()
    if not grouped:
        echo_info(f"No exercises match '{query}'" if query else "No exercises found")
        return

    total = 0
    for category, items in grouped.items():
        total += len(items)
        click.echo()
        click.echo(click.style(category or "Uncategorized", bold=True))
        for exercise in items:
            logged = await repo.entry_count(exercise.id)
            suffix = click.style(" [custom]", fg="cyan") if exercise.is_custom else ""
            plural = "" if logged == 1 else "s"
            click.echo(f"  {exercise.name}{suffix}  ({logged} workout{plural} logged)")

    click.echo()
    click.echo(f"Total: {total} exercise(s)")


@exercises.command()
@click.argument("exercise")
@click.pass_context
@async_command
@handle_errors
async def show(ctx, exercise: str):
    """Show an exercise's personal record and history."""
    ensure_initialized(ctx)

    db_path = get_db(ctx)
    found = await resolve_exercise(ExerciseRepository(db_path), exercise)
    entries = await WorkoutRepository(db_path).list_for_exercise(found.id)
    unit = await SettingsRepository(db_path).get_weight_unit()

    click.echo()
    click.echo(click.style(f"{found.name} ({found.category})", bold=True))
    click.echo("=" * 40)
    click.echo(f"Personal record: {unit.format(statistics.personal_record(found, entries))}")
    click.echo(f"Workouts logged: {len(entries)}")

    if not entries:
        click.echo()
        echo_info("No history yet.")
        return

    for entry in entries:
        click.echo()
        click.echo(
            f"{entry.date.strftime('%Y-%m-%d %H:%M')}  "
            f"{len(entry.sets)} sets, {unit.format(entry.max_weight)} max"
        )
        for s in entry.sorted_sets:
            warmup = " (warmup)" if s.is_warmup else ""
            click.echo(f"  Set {s.set_number}: {unit.format(s.weight)} x {s.reps}{warmup}")


@exercises.command()
@click.argument("name")
@click.option(
    "--category",
    "-c",
    type=click.Choice(CATEGORIES, case_sensitive=False),
    default=CATEGORIES[0],
    show_default=True,
    help="Exercise category",
)
@click.pass_context
@async_command
@handle_errors
async def add(ctx, name: str, category: str):
    """Add a custom exercise."""
    ensure_initialized(ctx)

    name = name.strip()
    if not name:
        raise click.BadParameter("Name cannot be empty", param_hint="NAME")

    repo = ExerciseRepository(get_db(ctx))
    exercise = Exercise(name=name, category=category, is_custom=True)
    await repo.add(exercise)
    echo_success(f"Added {exercise.name} to {exercise.category} ({short_id(exercise.id)})")


@exercises.command()
@click.argument("exercise")
@click.option("--force", "-f", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
@handle_errors
async def delete(ctx, exercise: str, force: bool):
    """Delete a custom exercise and all of its logged workouts."""
    ensure_initialized(ctx)

    repo = ExerciseRepository(get_db(ctx))
    found = await resolve_exercise(repo, exercise)
    logged = await repo.entry_count(found.id)

    if not force:
        click.echo(f"Exercise: {found.name} ({logged} workout(s) logged)")
        if not click.confirm("Delete this exercise and its history?"):
            echo_info("Cancelled")
            return

    await repo.delete(found.id)
    echo_success(f"Deleted {found.name}")


@exercises.command(name="table")
@click.pass_context
@async_command
@handle_errors
async def table(ctx):
    """List exercises as a table with ids."""
    ensure_initialized(ctx)

    repo = ExerciseRepository(get_db(ctx))
    all_exercises = await repo.list_all(order_by="category")
    rows = [
        [short_id(ex.id), ex.name, ex.category, "yes" if ex.is_custom else ""]
        for ex in all_exercises
    ]
    click.echo(format_table(["ID", "Name", "Category", "Custom"], rows))
