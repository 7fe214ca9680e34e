"""Routine management commands."""

import click

from ..db import ExerciseRepository, RoutineRepository
from ..models.routine import Routine
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    echo_warning,
    ensure_initialized,
    format_table,
    get_db,
    handle_errors,
    resolve_exercise,
    resolve_routine,
    short_id,
)


@click.group()
def routines():
    """Manage workout routines.

    Positions shown and accepted by these commands start at 1.
    """


def _echo_routine(routine: Routine) -> None:
    click.echo()
    click.echo(click.style(f"{routine.name} ({short_id(routine.id)})", bold=True))
    click.echo("=" * 40)
    if not routine.exercises:
        echo_info("No exercises yet. Add some with 'liftlog routines add'.")
        return
    for position, exercise in enumerate(routine.ordered_exercises(), start=1):
        click.echo(f"  {position}. {exercise.name} ({exercise.category})")


@routines.command(name="list")
@click.pass_context
@async_command
@handle_errors
async def list_routines(ctx):
    """List all routines."""
    ensure_initialized(ctx)

    repo = RoutineRepository(get_db(ctx))
    all_routines = await repo.list_all()

    if not all_routines:
        echo_info("No routines found. Create one with 'liftlog routines create'")
        return

    rows = [
        [
            short_id(r.id),
            r.name,
            str(len(r.exercises)),
            ", ".join(ex.name for ex in r.exercises[:3]) + ("..." if len(r.exercises) > 3 else ""),
        ]
        for r in all_routines
    ]
    click.echo()
    click.echo(format_table(["ID", "Name", "Exercises", "First"], rows))
    click.echo()
    click.echo(f"Total: {len(all_routines)} routine(s)")


@routines.command()
@click.argument("routine")
@click.pass_context
@async_command
@handle_errors
async def show(ctx, routine: str):
    """Show a routine's exercises in order."""
    ensure_initialized(ctx)

    found = await resolve_routine(RoutineRepository(get_db(ctx)), routine)
    _echo_routine(found)


@routines.command()
@click.argument("name")
@click.option(
    "--exercise",
    "-e",
    "exercise_keys",
    multiple=True,
    help="Exercise name or id; repeat to add several, in order",
)
@click.pass_context
@async_command
@handle_errors
async def create(ctx, name: str, exercise_keys: tuple[str, ...]):
    """Create a routine."""
    ensure_initialized(ctx)

    name = name.strip()
    if not name:
        raise click.BadParameter("Name cannot be empty", param_hint="NAME")

    db_path = get_db(ctx)
    exercise_repo = ExerciseRepository(db_path)
    selected = [await resolve_exercise(exercise_repo, key) for key in exercise_keys]

    routine = Routine(name=name, exercises=selected)
    await RoutineRepository(db_path).create(routine)
    echo_success(f"Created routine {routine.name} with {len(routine.exercises)} exercise(s)")


@routines.command()
@click.argument("routine")
@click.argument("exercise_keys", nargs=-1, required=True)
@click.pass_context
@async_command
@handle_errors
async def add(ctx, routine: str, exercise_keys: tuple[str, ...]):
    """Append exercises to a routine."""
    ensure_initialized(ctx)

    db_path = get_db(ctx)
    repo = RoutineRepository(db_path)
    found = await resolve_routine(repo, routine)
    exercise_repo = ExerciseRepository(db_path)
    selected = [await resolve_exercise(exercise_repo, key) for key in exercise_keys]

    skipped = [ex.name for ex in selected if found.contains(ex)]
    found.add_exercises(selected)
    await repo.update(found)

    if skipped:
        echo_warning(f"Already in routine: {', '.join(skipped)}")
    _echo_routine(found)


@routines.command()
@click.argument("routine")
@click.argument("source", type=click.IntRange(min=1))
@click.argument("destination", type=click.IntRange(min=1))
@click.pass_context
@async_command
@handle_errors
async def move(ctx, routine: str, source: int, destination: int):
    """Move the exercise at SOURCE to position DESTINATION."""
    ensure_initialized(ctx)

    repo = RoutineRepository(get_db(ctx))
    found = await resolve_routine(repo, routine)
    try:
        found.move_exercise(source - 1, destination - 1)
    except IndexError:
        echo_error(f"Positions must be between 1 and {len(found.exercises)}")
        ctx.exit(1)

    await repo.update(found)
    _echo_routine(found)


@routines.command()
@click.argument("routine")
@click.argument("position", type=click.IntRange(min=1))
@click.pass_context
@async_command
@handle_errors
async def remove(ctx, routine: str, position: int):
    """Remove the exercise at POSITION from a routine."""
    ensure_initialized(ctx)

    repo = RoutineRepository(get_db(ctx))
    found = await resolve_routine(repo, routine)
    try:
        removed = found.remove_exercise(position - 1)
    except IndexError:
        echo_error(f"Routine has {len(found.exercises)} exercise(s)")
        ctx.exit(1)

    await repo.update(found)
    echo_success(f"Removed {removed.name} from {found.name}")


@routines.command()
@click.argument("routine")
@click.argument("new_name")
@click.pass_context
@async_command
@handle_errors
async def rename(ctx, routine: str, new_name: str):
    """Rename a routine."""
    ensure_initialized(ctx)

    new_name = new_name.strip()
    if not new_name:
        raise click.BadParameter("Name cannot be empty", param_hint="NEW_NAME")

    repo = RoutineRepository(get_db(ctx))
    found = await resolve_routine(repo, routine)
    old_name = found.name
    found.name = new_name
    await repo.update(found)
    echo_success(f"Renamed {old_name} to {new_name}")


@routines.command()
@click.argument("routine")
@click.option("--force", "-f", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
@handle_errors
async def delete(ctx, routine: str, force: bool):
    """Delete a routine. Its exercises and workout history are kept."""
    ensure_initialized(ctx)

    repo = RoutineRepository(get_db(ctx))
    found = await resolve_routine(repo, routine)

    if not force:
        click.echo(f"Routine: {found.name}")
        if not click.confirm("Are you sure you want to delete this routine?"):
            echo_info("Cancelled")
            return

    await repo.delete(found.id)
    echo_success(f"Deleted routine {found.name}")
