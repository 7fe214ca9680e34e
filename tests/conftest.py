"""Pytest configuration and fixtures."""

import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from liftlog.db import init_db
from liftlog.models.exercise import Exercise
from liftlog.models.workout import SetEntry, WorkoutEntry

# A Wednesday; the week (starting Monday) began on 2026-10-12
NOW = datetime(2026, 10, 14, 18, 0)


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
async def db_path(temp_db_path):
    """A temporary database with the schema created."""
    await init_db(temp_db_path)
    return temp_db_path


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def bench():
    return Exercise(name="Bench Press", category="Chest")


@pytest.fixture
def squat():
    return Exercise(name="Squat", category="Legs")


@pytest.fixture
def curl():
    return Exercise(name="Cable Curl", category="Arms", is_custom=True)


@pytest.fixture
def make_entry():
    """Factory for entries: make_entry(exercise, date, [(weight, reps), ...])."""

    def _make(exercise, date, sets=((100, 5),)):
        return WorkoutEntry(
            exercise=exercise,
            date=date,
            sets=[
                SetEntry(set_number=number, weight=weight, reps=reps)
                for number, (weight, reps) in enumerate(sets, start=1)
            ],
        )

    return _make
