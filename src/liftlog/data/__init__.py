"""Seed data for liftlog."""

from .seed import CATEGORIES, SEED_EXERCISES, SEED_ROUTINES, SeedResult, seed_if_needed

__all__ = ["CATEGORIES", "SEED_EXERCISES", "SEED_ROUTINES", "SeedResult", "seed_if_needed"]
