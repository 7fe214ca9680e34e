"""Initialize project command."""

import click

from ..data.seed import seed_if_needed
from ..db import open_store
from .base import async_command, echo_info, echo_success, get_db, handle_errors


@click.command()
@click.pass_context
@async_command
@handle_errors
async def init(ctx: click.Context):
    """Initialize the liftlog database.

    Creates the data directory and SQLite database, then adds the default
    exercise library. On a fresh install, starter routines are created too.
    Running it again only adds catalog exercises that are missing.
    """
    db_path = get_db(ctx)

    echo_info(f"Initializing liftlog in {db_path.parent}")

    await open_store(db_path)
    echo_success("Database initialized")

    result = await seed_if_needed(db_path)
    if result.exercises_added:
        echo_success(f"Exercise library populated ({result.exercises_added} exercises)")
    if result.routines_added:
        echo_success(f"Starter routines created ({result.routines_added} routines)")

    click.echo()
    click.echo("liftlog is ready to use!")
    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Browse exercises and routines:")
    click.echo("     liftlog exercises list")
    click.echo("     liftlog routines list")
    click.echo()
    click.echo("  2. Log a workout:")
    click.echo('     liftlog workout start --routine "Push Day"')
