"""Data access layer for liftlog."""

import logging
from datetime import date, datetime
from pathlib import Path

import aiosqlite

from ..errors import NotFoundError, ProtectedExerciseError
from ..models.exercise import Exercise, group_by_category
from ..models.routine import Routine
from ..models.settings import WeightUnit
from ..models.workout import SetEntry, WorkoutEntry, local_day
from .engine import connect, get_db_path

logger = logging.getLogger(__name__)


def _order_clause(sort_keys: dict[str, str], order_by: str) -> str:
    """Look up an ORDER BY clause for a whitelisted sort key."""
    try:
        return sort_keys[order_by]
    except KeyError:
        raise ValueError(
            f"Unknown sort key {order_by!r}; expected one of {sorted(sort_keys)}"
        ) from None


def row_to_exercise(row: aiosqlite.Row) -> Exercise:
    """Convert a database row to an Exercise."""
    return Exercise(
        id=row["id"],
        name=row["name"],
        category=row["category"],
        is_custom=bool(row["is_custom"]),
    )


def _like_pattern(query: str) -> str:
    """Substring pattern for ``LIKE ... ESCAPE '\\'`` with wildcards escaped."""
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


async def insert_exercise(db: aiosqlite.Connection, exercise: Exercise) -> None:
    """Insert an exercise row without committing."""
    await db.execute(
        "INSERT INTO exercises (id, name, category, is_custom) VALUES (?, ?, ?, ?)",
        (exercise.id, exercise.name, exercise.category, int(exercise.is_custom)),
    )


async def write_routine_exercises(db: aiosqlite.Connection, routine: Routine) -> None:
    """Replace a routine's membership rows, storing each exercise's position."""
    await db.execute(
        "DELETE FROM routine_exercises WHERE routine_id = ?", (routine.id,)
    )
    await db.executemany(
        """
        INSERT INTO routine_exercises (routine_id, exercise_id, position)
        VALUES (?, ?, ?)
        """,
        [(routine.id, ex.id, position) for position, ex in enumerate(routine.exercises)],
    )


async def insert_routine(db: aiosqlite.Connection, routine: Routine) -> None:
    """Insert a routine and its ordered exercises without committing."""
    await db.execute(
        "INSERT INTO routines (id, name) VALUES (?, ?)",
        (routine.id, routine.name),
    )
    await write_routine_exercises(db, routine)


class ExerciseRepository:
    """Repository for the exercise library."""

    SORT_KEYS = {
        "name": "name COLLATE NOCASE, id",
        "category": "category COLLATE NOCASE, name COLLATE NOCASE, id",
        "created": "created_at, name COLLATE NOCASE",
    }

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def add(self, exercise: Exercise) -> str:
        """Add a new exercise."""
        async with connect(self.db_path) as db:
            await insert_exercise(db, exercise)
            await db.commit()
        return exercise.id

    async def get(self, exercise_id: str) -> Exercise | None:
        """Get an exercise by ID."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM exercises WHERE id = ?", (exercise_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return row_to_exercise(row)

    async def get_by_name(self, name: str) -> Exercise | None:
        """Get an exercise by name, ignoring case."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM exercises WHERE name = ? COLLATE NOCASE ORDER BY created_at LIMIT 1",
                (name,),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return row_to_exercise(row)

    async def list_all(self, order_by: str = "name") -> list[Exercise]:
        """List all exercises."""
        clause = _order_clause(self.SORT_KEYS, order_by)
        async with connect(self.db_path) as db:
            cursor = await db.execute(f"SELECT * FROM exercises ORDER BY {clause}")
            rows = await cursor.fetchall()
            return [row_to_exercise(row) for row in rows]

    async def search(self, query: str) -> list[Exercise]:
        """Search exercises whose name contains ``query``, ignoring case.

        ``%`` and ``_`` in the query match literally. A blank query
        returns every exercise.
        """
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT * FROM exercises WHERE name LIKE ? ESCAPE '\\'
                ORDER BY name COLLATE NOCASE, id
                """,
                (_like_pattern(query.strip()),),
            )
            rows = await cursor.fetchall()
            return [row_to_exercise(row) for row in rows]

    async def grouped_by_category(self) -> dict[str, list[Exercise]]:
        """All exercises grouped by category, categories and names alphabetical."""
        return group_by_category(await self.list_all())

    async def count(self) -> int:
        async with connect(self.db_path) as db:
            cursor = await db.execute("SELECT COUNT(*) FROM exercises")
            row = await cursor.fetchone()
            return row[0]

    async def entry_count(self, exercise_id: str) -> int:
        """Number of workout entries logged for an exercise."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT COUNT(*) FROM workout_entries WHERE exercise_id = ?",
                (exercise_id,),
            )
            row = await cursor.fetchone()
            return row[0]

    async def delete(self, exercise_id: str, allow_seeded: bool = False) -> None:
        """Delete an exercise along with its logged entries.

        Raises:
            NotFoundError: If the exercise does not exist
            ProtectedExerciseError: If the exercise is seeded and
                ``allow_seeded`` is not set
        """
        exercise = await self.get(exercise_id)
        if exercise is None:
            raise NotFoundError("Exercise", exercise_id)
        if not exercise.is_custom and not allow_seeded:
            raise ProtectedExerciseError(
                f"{exercise.name!r} is a built-in exercise and cannot be deleted"
            )

        async with connect(self.db_path) as db:
            await db.execute("DELETE FROM exercises WHERE id = ?", (exercise_id,))
            await db.commit()
        logger.info("Deleted exercise %s (%s)", exercise.name, exercise_id)


class RoutineRepository:
    """Repository for routines and their ordered exercises."""

    SORT_KEYS = {
        "name": "name COLLATE NOCASE, id",
        "created": "created_at, name COLLATE NOCASE",
    }

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, routine: Routine) -> str:
        """Create a new routine with its exercises."""
        async with connect(self.db_path) as db:
            await insert_routine(db, routine)
            await db.commit()
        return routine.id

    async def get(self, routine_id: str) -> Routine | None:
        """Get a routine by ID."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM routines WHERE id = ?", (routine_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return await self._row_to_routine(db, row)

    async def get_by_name(self, name: str) -> Routine | None:
        """Get a routine by name, ignoring case."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM routines WHERE name = ? COLLATE NOCASE ORDER BY created_at LIMIT 1",
                (name,),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return await self._row_to_routine(db, row)

    async def list_all(self, order_by: str = "name") -> list[Routine]:
        """List all routines."""
        clause = _order_clause(self.SORT_KEYS, order_by)
        async with connect(self.db_path) as db:
            cursor = await db.execute(f"SELECT * FROM routines ORDER BY {clause}")
            rows = await cursor.fetchall()
            return [await self._row_to_routine(db, row) for row in rows]

    async def update(self, routine: Routine) -> None:
        """Rewrite a routine's name, membership and order together."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "UPDATE routines SET name = ? WHERE id = ?", (routine.name, routine.id)
            )
            if cursor.rowcount == 0:
                raise NotFoundError("Routine", routine.id)
            await write_routine_exercises(db, routine)
            await db.commit()

    async def delete(self, routine_id: str) -> None:
        """Delete a routine. Its exercises are kept."""
        async with connect(self.db_path) as db:
            cursor = await db.execute("DELETE FROM routines WHERE id = ?", (routine_id,))
            if cursor.rowcount == 0:
                raise NotFoundError("Routine", routine_id)
            await db.commit()

    async def count(self) -> int:
        async with connect(self.db_path) as db:
            cursor = await db.execute("SELECT COUNT(*) FROM routines")
            row = await cursor.fetchone()
            return row[0]

    async def _row_to_routine(self, db: aiosqlite.Connection, row: aiosqlite.Row) -> Routine:
        """Convert a database row to a Routine, loading its exercises in order."""
        cursor = await db.execute(
            """
            SELECT e.* FROM routine_exercises re
            JOIN exercises e ON e.id = re.exercise_id
            WHERE re.routine_id = ?
            ORDER BY re.position
            """,
            (row["id"],),
        )
        exercises = [row_to_exercise(r) for r in await cursor.fetchall()]
        return Routine(id=row["id"], name=row["name"], exercises=exercises)


class WorkoutRepository:
    """Repository for logged workout entries and their sets."""

    SORT_KEYS = {
        "date": "w.date DESC, w.id",
        "date_asc": "w.date ASC, w.id",
        "exercise": "e.name COLLATE NOCASE, w.date DESC",
    }

    _SELECT = """
        SELECT w.id AS entry_id, w.date AS entry_date,
               e.id AS id, e.name AS name, e.category AS category,
               e.is_custom AS is_custom
        FROM workout_entries w
        LEFT JOIN exercises e ON e.id = w.exercise_id
    """

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def add_many(self, entries: list[WorkoutEntry]) -> int:
        """Insert entries and their sets in a single transaction.

        Either every entry is stored or, on error, none are.

        Returns:
            Number of entries stored
        """
        async with connect(self.db_path) as db:
            for entry in entries:
                await db.execute(
                    "INSERT INTO workout_entries (id, exercise_id, date) VALUES (?, ?, ?)",
                    (
                        entry.id,
                        entry.exercise.id if entry.exercise else None,
                        entry.date.isoformat(),
                    ),
                )
                await db.executemany(
                    """
                    INSERT INTO set_entries
                    (id, entry_id, set_number, weight, reps, is_warmup)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    [
                        (s.id, entry.id, s.set_number, s.weight, s.reps, int(s.is_warmup))
                        for s in entry.sets
                    ],
                )
            await db.commit()
        return len(entries)

    async def add(self, entry: WorkoutEntry) -> str:
        """Insert a single entry with its sets."""
        await self.add_many([entry])
        return entry.id

    async def get(self, entry_id: str) -> WorkoutEntry | None:
        """Get an entry by ID."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(f"{self._SELECT} WHERE w.id = ?", (entry_id,))
            rows = await cursor.fetchall()
            entries = await self._rows_to_entries(db, rows)
            return entries[0] if entries else None

    async def list_all(self, order_by: str = "date") -> list[WorkoutEntry]:
        """List all entries, newest first by default."""
        clause = _order_clause(self.SORT_KEYS, order_by)
        async with connect(self.db_path) as db:
            cursor = await db.execute(f"{self._SELECT} ORDER BY {clause}")
            rows = await cursor.fetchall()
            return await self._rows_to_entries(db, rows)

    async def list_for_exercise(self, exercise_id: str) -> list[WorkoutEntry]:
        """List an exercise's entries, newest first."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                f"{self._SELECT} WHERE w.exercise_id = ? ORDER BY w.date DESC, w.id",
                (exercise_id,),
            )
            rows = await cursor.fetchall()
            return await self._rows_to_entries(db, rows)

    async def list_since(self, since: datetime) -> list[WorkoutEntry]:
        """List entries dated at or after ``since``, newest first."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                f"{self._SELECT} WHERE w.date >= ? ORDER BY w.date DESC, w.id",
                (since.isoformat(),),
            )
            rows = await cursor.fetchall()
            return await self._rows_to_entries(db, rows)

    async def delete(self, entry_id: str) -> None:
        """Delete an entry and its sets."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "DELETE FROM workout_entries WHERE id = ?", (entry_id,)
            )
            if cursor.rowcount == 0:
                raise NotFoundError("Workout entry", entry_id)
            await db.commit()

    async def delete_day(self, day: date) -> int:
        """Delete every entry logged on a local calendar day, with its sets.

        Days are bucketed with ``local_day`` so this removes exactly the
        group shown for that day in the history list.

        Returns:
            Number of entries deleted
        """
        async with connect(self.db_path) as db:
            cursor = await db.execute("SELECT id, date FROM workout_entries")
            entry_ids = [
                row["id"]
                for row in await cursor.fetchall()
                if local_day(datetime.fromisoformat(row["date"])) == day
            ]
            await db.executemany(
                "DELETE FROM workout_entries WHERE id = ?",
                [(entry_id,) for entry_id in entry_ids],
            )
            await db.commit()
        return len(entry_ids)

    async def clear(self) -> int:
        """Delete all entries and sets, keeping exercises and routines.

        Returns:
            Number of entries deleted
        """
        async with connect(self.db_path) as db:
            await db.execute("DELETE FROM set_entries")
            cursor = await db.execute("DELETE FROM workout_entries")
            await db.commit()
            return cursor.rowcount

    async def count(self) -> int:
        async with connect(self.db_path) as db:
            cursor = await db.execute("SELECT COUNT(*) FROM workout_entries")
            row = await cursor.fetchone()
            return row[0]

    async def _rows_to_entries(
        self, db: aiosqlite.Connection, rows: list[aiosqlite.Row]
    ) -> list[WorkoutEntry]:
        """Convert joined rows to entries, loading all their sets at once."""
        if not rows:
            return []

        entry_ids = [row["entry_id"] for row in rows]
        placeholders = ", ".join("?" for _ in entry_ids)
        cursor = await db.execute(
            f"""
            SELECT * FROM set_entries
            WHERE entry_id IN ({placeholders})
            ORDER BY set_number
            """,
            entry_ids,
        )
        sets_by_entry: dict[str, list[SetEntry]] = {}
        for set_row in await cursor.fetchall():
            sets_by_entry.setdefault(set_row["entry_id"], []).append(
                SetEntry(
                    id=set_row["id"],
                    set_number=set_row["set_number"],
                    weight=set_row["weight"],
                    reps=set_row["reps"],
                    is_warmup=bool(set_row["is_warmup"]),
                )
            )

        return [
            WorkoutEntry(
                id=row["entry_id"],
                exercise=row_to_exercise(row) if row["id"] is not None else None,
                date=datetime.fromisoformat(row["entry_date"]),
                sets=sets_by_entry.get(row["entry_id"], []),
            )
            for row in rows
        ]


class SettingsRepository:
    """Repository for user preferences."""

    WEIGHT_UNIT_KEY = "weight_unit"

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def get(self, key: str, default: str | None = None) -> str | None:
        async with connect(self.db_path) as db:
            cursor = await db.execute("SELECT value FROM settings WHERE key = ?", (key,))
            row = await cursor.fetchone()
            return row["value"] if row else default

    async def set(self, key: str, value: str) -> None:
        async with connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO settings (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                (key, value),
            )
            await db.commit()

    async def get_weight_unit(self) -> WeightUnit:
        """Get the display unit, falling back to the default if unset or unknown."""
        value = await self.get(self.WEIGHT_UNIT_KEY)
        try:
            return WeightUnit(value)
        except ValueError:
            return WeightUnit.default()

    async def set_weight_unit(self, unit: WeightUnit) -> None:
        await self.set(self.WEIGHT_UNIT_KEY, WeightUnit(unit).value)
