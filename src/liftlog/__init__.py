"""LiftLog: local workout logging and progress statistics."""

__version__ = "0.1.0"
