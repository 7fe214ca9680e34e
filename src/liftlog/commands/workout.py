"""Workout logging commands."""

import re

import click

from ..clients.workout import InteractiveWorkoutClient
from ..db import ExerciseRepository, RoutineRepository, SettingsRepository, WorkoutRepository
from ..models.session import WorkoutSession
from ..services.workout_log import CommitResult, WorkoutLogService
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    get_db,
    handle_errors,
    resolve_exercise,
    resolve_routine,
)

# WEIGHTxREPS with an optional trailing "w" for warm-up sets, e.g. 100x5, 60x10w
SET_PATTERN = re.compile(r"^\s*(?P<weight>[^x]*)x(?P<reps>[^xw]*)(?P<warmup>w?)\s*$", re.IGNORECASE)


def parse_set_spec(spec: str) -> tuple[str, str, bool]:
    """Split a WEIGHTxREPS[w] spec into raw weight, raw reps and warm-up flag."""
    match = SET_PATTERN.match(spec)
    if not match:
        raise click.BadParameter(f"'{spec}' is not in WEIGHTxREPS form (e.g. 100x5)")
    return match["weight"].strip(), match["reps"].strip(), bool(match["warmup"])


def _report(ctx: click.Context, result: CommitResult) -> None:
    if not result.ok:
        echo_error(f"Workout could not be saved: {result.error}")
        ctx.exit(1)
    if not result.entries:
        echo_info("No completed sets; nothing was saved.")
        return
    echo_success(
        f"Saved {len(result.entries)} exercise(s), {result.set_count} set(s)"
    )


@click.group()
def workout():
    """Log workouts."""


@workout.command()
@click.option("--routine", "-r", "routine_key", help="Pre-fill exercises from a routine")
@click.pass_context
@async_command
@handle_errors
async def start(ctx, routine_key: str | None):
    """Start an interactive workout session."""
    ensure_initialized(ctx)

    db_path = get_db(ctx)
    routine = None
    if routine_key:
        routine = await resolve_routine(RoutineRepository(db_path), routine_key)

    client = InteractiveWorkoutClient(
        exercises=await ExerciseRepository(db_path).list_all(),
        unit=await SettingsRepository(db_path).get_weight_unit(),
    )
    session = await client.run(WorkoutSession.start(routine))
    if session is None:
        echo_info("Workout discarded.")
        return

    result = await WorkoutLogService(WorkoutRepository(db_path)).commit(session)
    _report(ctx, result)


@workout.command()
@click.argument("exercise")
@click.option(
    "--set",
    "-s",
    "set_specs",
    multiple=True,
    required=True,
    help="A completed set as WEIGHTxREPS, suffix w for warm-up (repeatable)",
)
@click.pass_context
@async_command
@handle_errors
async def log(ctx, exercise: str, set_specs: tuple[str, ...]):
    """Log completed sets for one exercise without prompts.

    Example: liftlog workout log "Bench Press" -s 60x10w -s 100x5 -s 100x5
    """
    ensure_initialized(ctx)

    db_path = get_db(ctx)
    parsed = [parse_set_spec(spec) for spec in set_specs]
    found = await resolve_exercise(ExerciseRepository(db_path), exercise)

    session = WorkoutSession.start().add_exercise(found)
    for index, (weight, reps, is_warmup) in enumerate(parsed):
        if index > 0:
            session = session.add_set(0)
        session = session.update_set(0, index, weight=weight, reps=reps, is_warmup=is_warmup)
        session = session.complete_set(0, index)

    result = await WorkoutLogService(WorkoutRepository(db_path)).commit(session)
    _report(ctx, result)
