"""CLI commands for liftlog."""

from .exercises import exercises
from .history import history
from .init import init
from .routines import routines
from .settings import settings
from .stats import stats
from .workout import workout

__all__ = [
    "exercises",
    "history",
    "init",
    "routines",
    "settings",
    "stats",
    "workout",
]
