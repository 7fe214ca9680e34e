"""Database layer for liftlog."""

from .engine import connect, get_db_path, init_db, open_store
from .repositories import (
    ExerciseRepository,
    RoutineRepository,
    SettingsRepository,
    WorkoutRepository,
)

__all__ = [
    "ExerciseRepository",
    "RoutineRepository",
    "SettingsRepository",
    "WorkoutRepository",
    "connect",
    "get_db_path",
    "init_db",
    "open_store",
]
