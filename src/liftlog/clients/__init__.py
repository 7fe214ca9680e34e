"""Interactive front ends for liftlog."""

from .workout import InteractiveWorkoutClient

__all__ = ["InteractiveWorkoutClient"]
