"""Preference commands."""

import click

from ..db import SettingsRepository
from ..models.settings import WeightUnit
from .base import async_command, echo_info, echo_success, ensure_initialized, get_db, handle_errors


@click.group()
def settings():
    """View and change preferences."""


@settings.command()
@click.argument(
    "value",
    required=False,
    type=click.Choice([u.value for u in WeightUnit], case_sensitive=False),
)
@click.pass_context
@async_command
@handle_errors
async def unit(ctx, value: str | None):
    """Show or set the weight unit.

    The unit only changes how weights are labelled. Logged values are
    not converted.
    """
    ensure_initialized(ctx)

    repo = SettingsRepository(get_db(ctx))
    if value is None:
        current = await repo.get_weight_unit()
        echo_info(f"Weight unit: {current.value}")
        return

    await repo.set_weight_unit(WeightUnit(value.lower()))
    echo_success(f"Weight unit set to {value.lower()}")
