"""CLI entry point for liftlog."""

import logging
from pathlib import Path

import click

from . import __version__
from .commands import exercises, history, init, routines, settings, stats, workout


@click.group()
@click.version_option(version=__version__, prog_name="liftlog")
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="LIFTLOG_DATA_DIR",
    help="Directory holding the database (default: ~/.liftlog)",
)
@click.option(
    "--week-start",
    type=click.IntRange(0, 6),
    envvar="LIFTLOG_WEEK_START",
    default=0,
    show_default=True,
    help="First day of the week for weekly stats, 0 = Monday .. 6 = Sunday",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def main(ctx, data_dir: Path | None, week_start: int, verbose: bool):
    """liftlog: Track exercises, routines and workouts from the terminal.

    Log sets as you train and follow your personal records, streaks and
    volume trends.

    Example usage:

        # Initialize the database and exercise library
        liftlog init

        # Log a workout interactively, starting from a routine
        liftlog workout start --routine "Push Day"

        # Or log one exercise directly
        liftlog workout log "Bench Press" -s 100x5 -s 100x5

        # Check progress
        liftlog stats summary
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["data_dir"] = data_dir
    ctx.obj["week_start"] = week_start


# Register commands
main.add_command(init)
main.add_command(exercises)
main.add_command(routines)
main.add_command(workout)
main.add_command(history)
main.add_command(stats)
main.add_command(settings)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
