"""Default exercise catalog and starter routines."""

import logging
from dataclasses import dataclass
from pathlib import Path

from ..db.engine import connect, get_db_path
from ..db.repositories import insert_exercise, insert_routine, row_to_exercise
from ..models.exercise import Exercise
from ..models.routine import Routine

logger = logging.getLogger(__name__)

SEED_EXERCISES: list[tuple[str, str]] = [
    # Chest
    ("Bench Press", "Chest"),
    ("Incline DB Press", "Chest"),
    ("Cable Flyes", "Chest"),
    ("Dips", "Chest"),
    ("Decline Bench Press", "Chest"),
    ("Push-ups", "Chest"),
    ("Pec Deck", "Chest"),
    ("DB Flyes", "Chest"),
    # Back
    ("Barbell Row", "Back"),
    ("Pull-ups", "Back"),
    ("Lat Pulldown", "Back"),
    ("Seated Cable Row", "Back"),
    ("T-Bar Row", "Back"),
    ("Single-Arm DB Row", "Back"),
    ("Chin-ups", "Back"),
    ("Cable Pullover", "Back"),
    # Legs
    ("Squat", "Legs"),
    ("Deadlift", "Legs"),
    ("Leg Press", "Legs"),
    ("Romanian Deadlift", "Legs"),
    ("Leg Curl", "Legs"),
    ("Leg Extension", "Legs"),
    ("Bulgarian Split Squat", "Legs"),
    ("Hip Thrust", "Legs"),
    ("Calf Raise", "Legs"),
    ("Hack Squat", "Legs"),
    ("Goblet Squat", "Legs"),
    # Shoulders
    ("Overhead Press", "Shoulders"),
    ("Lateral Raise", "Shoulders"),
    ("Face Pull", "Shoulders"),
    ("DB Shoulder Press", "Shoulders"),
    ("Arnold Press", "Shoulders"),
    ("Rear Delt Fly", "Shoulders"),
    ("Upright Row", "Shoulders"),
    ("Shrugs", "Shoulders"),
    # Arms
    ("Barbell Curl", "Arms"),
    ("Tricep Pushdown", "Arms"),
    ("Hammer Curl", "Arms"),
    ("Preacher Curl", "Arms"),
    ("Concentration Curl", "Arms"),
    ("Skull Crushers", "Arms"),
    ("Overhead Tricep Extension", "Arms"),
    ("Cable Curl", "Arms"),
    ("Dip (Tricep)", "Arms"),
    # Core
    ("Plank", "Core"),
    ("Cable Crunch", "Core"),
    ("Hanging Leg Raise", "Core"),
    ("Ab Wheel Rollout", "Core"),
    ("Russian Twist", "Core"),
    ("Dead Bug", "Core"),
    ("Mountain Climbers", "Core"),
    # Cardio
    ("Treadmill", "Cardio"),
    ("Rowing Machine", "Cardio"),
    ("Stair Climber", "Cardio"),
    ("Jump Rope", "Cardio"),
    # Olympic
    ("Clean & Jerk", "Olympic"),
    ("Snatch", "Olympic"),
    ("Power Clean", "Olympic"),
    ("Push Press", "Olympic"),
]

SEED_ROUTINES: list[tuple[str, list[str]]] = [
    ("Push Day", ["Bench Press", "Incline DB Press", "Overhead Press", "Lateral Raise", "Tricep Pushdown"]),
    ("Pull Day", ["Barbell Row", "Pull-ups", "Lat Pulldown", "Face Pull", "Barbell Curl"]),
    ("Leg Day", ["Squat", "Deadlift", "Leg Press", "Romanian Deadlift", "Leg Curl"]),
]

# Categories offered when adding a custom exercise
CATEGORIES: list[str] = list(dict.fromkeys(category for _, category in SEED_EXERCISES))


@dataclass
class SeedResult:
    """What a seeding pass added."""

    exercises_added: int = 0
    routines_added: int = 0


async def seed_if_needed(db_path: Path | None = None) -> SeedResult:
    """Add catalog exercises that are missing by name.

    Starter routines are only created on a fresh install, detected by the
    exercise table being empty beforehand, so routines the user deleted are
    not brought back.

    Args:
        db_path: Optional database path. Uses default if not provided.

    Returns:
        Counts of exercises and routines added
    """
    if db_path is None:
        db_path = get_db_path()

    result = SeedResult()
    async with connect(db_path) as db:
        cursor = await db.execute("SELECT * FROM exercises")
        existing = await cursor.fetchall()
        fresh_install = not existing
        by_name = {row["name"]: row_to_exercise(row) for row in existing}

        for name, category in SEED_EXERCISES:
            if name in by_name:
                continue
            exercise = Exercise(name=name, category=category)
            await insert_exercise(db, exercise)
            by_name[name] = exercise
            result.exercises_added += 1

        if fresh_install:
            for routine_name, exercise_names in SEED_ROUTINES:
                routine = Routine(
                    name=routine_name,
                    exercises=[by_name[n] for n in exercise_names if n in by_name],
                )
                await insert_routine(db, routine)
                result.routines_added += 1

        await db.commit()

    if result.exercises_added or result.routines_added:
        logger.info(
            "Seeded %d exercises and %d routines",
            result.exercises_added,
            result.routines_added,
        )
    return result
