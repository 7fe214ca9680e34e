"""Data models for liftlog."""

from .exercise import Exercise, group_by_category
from .routine import Routine, order_from_membership
from .session import (
    ExerciseDraft,
    FinishedWorkout,
    SessionState,
    SetDraft,
    WorkoutSession,
)
from .settings import WeightUnit
from .workout import ExerciseRef, Found, Orphaned, SetEntry, WorkoutEntry, local_day

__all__ = [
    "Exercise",
    "ExerciseDraft",
    "ExerciseRef",
    "FinishedWorkout",
    "Found",
    "Orphaned",
    "Routine",
    "SessionState",
    "SetDraft",
    "SetEntry",
    "WeightUnit",
    "WorkoutEntry",
    "WorkoutSession",
    "group_by_category",
    "local_day",
    "order_from_membership",
]
