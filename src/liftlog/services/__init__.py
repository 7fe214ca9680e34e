"""Services for liftlog."""

from .workout_log import CommitResult, WorkoutLogService

__all__ = ["CommitResult", "WorkoutLogService"]
