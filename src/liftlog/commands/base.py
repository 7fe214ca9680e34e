"""Shared CLI utilities."""

import asyncio
from functools import wraps
from pathlib import Path

import click

from ..db import get_db_path
from ..errors import LiftLogError
from ..models.exercise import Exercise
from ..models.routine import Routine


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def get_options(ctx: click.Context) -> dict:
    """Options set on the root command group."""
    root = ctx.find_root()
    if root.obj is None:
        root.obj = {}
    return root.obj


def get_db(ctx: click.Context) -> Path:
    """Get the database path selected for this invocation."""
    options = get_options(ctx)
    if "db_path" not in options:
        options["db_path"] = get_db_path(options.get("data_dir"))
    return options["db_path"]


def get_week_start(ctx: click.Context) -> int:
    return get_options(ctx).get("week_start", 0)


def ensure_initialized(ctx: click.Context) -> None:
    """Ensure the database is initialized."""
    db_path = get_db(ctx)
    if not db_path.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Project not initialized. Run 'liftlog init' first."
        )
        ctx.exit(1)


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def short_id(record_id: str) -> str:
    """Abbreviated identifier for display."""
    return record_id[:8]


def match_id(records: list, key: str) -> list:
    """Records whose id equals or starts with ``key``."""
    exact = [r for r in records if r.id == key]
    if exact:
        return exact
    return [r for r in records if r.id.startswith(key)]


async def resolve_exercise(repo, key: str) -> Exercise:
    """Find an exercise by name or id (prefix).

    Raises:
        click.ClickException: If nothing or more than one exercise matches
    """
    exercise = await repo.get_by_name(key)
    if exercise:
        return exercise
    matches = match_id(await repo.list_all(), key)
    if len(matches) == 1:
        return matches[0]
    if matches:
        raise click.ClickException(f"'{key}' matches more than one exercise")
    raise click.ClickException(f"Exercise '{key}' not found")


async def resolve_routine(repo, key: str) -> Routine:
    """Find a routine by name or id (prefix)."""
    routine = await repo.get_by_name(key)
    if routine:
        return routine
    matches = match_id(await repo.list_all(), key)
    if len(matches) == 1:
        return matches[0]
    if matches:
        raise click.ClickException(f"'{key}' matches more than one routine")
    raise click.ClickException(f"Routine '{key}' not found")


def handle_errors(f):
    """Turn liftlog errors into a clean CLI failure."""

    @wraps(f)
    async def wrapper(*args, **kwargs):
        try:
            return await f(*args, **kwargs)
        except LiftLogError as e:
            raise click.ClickException(str(e)) from e

    return wrapper


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    # Calculate column widths
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = []

    header_line = ""
    for i, h in enumerate(headers):
        header_line += h.ljust(widths[i] + padding)
    lines.append(header_line.rstrip())

    sep_line = ""
    for w in widths:
        sep_line += "-" * w + " " * padding
    lines.append(sep_line.rstrip())

    for row in rows:
        row_line = ""
        for i, cell in enumerate(row):
            row_line += str(cell).ljust(widths[i] + padding)
        lines.append(row_line.rstrip())

    return "\n".join(lines)
