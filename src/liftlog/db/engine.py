"""Database engine setup and initialization."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

import aiosqlite

from ..errors import StoreError, StoreInitError

logger = logging.getLogger(__name__)

# Default data directory
DATA_DIR = Path.home() / ".liftlog"

DB_FILENAME = "liftlog.db"


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = DATA_DIR
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / DB_FILENAME


@asynccontextmanager
async def connect(db_path: Path) -> AsyncIterator[aiosqlite.Connection]:
    """Open a connection with foreign keys enforced.

    SQLite errors raised while the connection is open surface as
    ``StoreError``. Nothing is committed unless the caller commits.
    """
    try:
        async with aiosqlite.connect(db_path) as db:
            db.row_factory = aiosqlite.Row
            await db.execute("PRAGMA foreign_keys = ON")
            yield db
    except aiosqlite.Error as e:
        raise StoreError(f"Database error: {e}") from e


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with connect(db_path) as db:
        # Exercise library, seeded and custom
        await db.execute("""
            CREATE TABLE IF NOT EXISTS exercises (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                category TEXT NOT NULL DEFAULT '',
                is_custom INTEGER DEFAULT 0,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS routines (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Routine membership and order in one place
        await db.execute("""
            CREATE TABLE IF NOT EXISTS routine_exercises (
                routine_id TEXT NOT NULL,
                exercise_id TEXT NOT NULL,
                position INTEGER NOT NULL,
                PRIMARY KEY (routine_id, exercise_id),
                FOREIGN KEY (routine_id) REFERENCES routines(id) ON DELETE CASCADE,
                FOREIGN KEY (exercise_id) REFERENCES exercises(id) ON DELETE CASCADE
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_entries (
                id TEXT PRIMARY KEY,
                exercise_id TEXT,
                date TIMESTAMP NOT NULL,
                FOREIGN KEY (exercise_id) REFERENCES exercises(id) ON DELETE CASCADE
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS set_entries (
                id TEXT PRIMARY KEY,
                entry_id TEXT NOT NULL,
                set_number INTEGER NOT NULL,
                weight REAL NOT NULL DEFAULT 0,
                reps INTEGER NOT NULL DEFAULT 0,
                is_warmup INTEGER DEFAULT 0,
                FOREIGN KEY (entry_id) REFERENCES workout_entries(id) ON DELETE CASCADE
            )
        """)

        # Key/value user preferences
        await db.execute("""
            CREATE TABLE IF NOT EXISTS settings (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
        """)

        # Create indexes for common queries
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_exercises_name
            ON exercises(name)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_routine_exercises_routine
            ON routine_exercises(routine_id, position)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workout_entries_exercise
            ON workout_entries(exercise_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workout_entries_date
            ON workout_entries(date)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_set_entries_entry
            ON set_entries(entry_id)
        """)

        await db.commit()


def _remove_store_files(db_path: Path) -> None:
    """Delete the database file and its journal siblings."""
    for path in (
        db_path,
        db_path.with_name(db_path.name + "-wal"),
        db_path.with_name(db_path.name + "-shm"),
        db_path.with_name(db_path.name + "-journal"),
    ):
        path.unlink(missing_ok=True)


async def open_store(db_path: Path | None = None) -> Path:
    """Initialize the store, recreating it from scratch if it is unusable.

    Recreating discards all stored data. If the fresh store cannot be
    created either, ``StoreInitError`` is raised.

    Returns:
        The path of the ready database
    """
    if db_path is None:
        db_path = get_db_path()

    try:
        await init_db(db_path)
        return db_path
    except StoreError as e:
        logger.warning("Store at %s is unusable (%s); recreating it", db_path, e)

    try:
        _remove_store_files(db_path)
        await init_db(db_path)
    except (OSError, StoreError) as e:
        raise StoreInitError(f"Could not create store at {db_path}: {e}") from e

    return db_path
