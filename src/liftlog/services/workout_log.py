"""Committing finished workouts and managing logged history."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime

from ..db.repositories import WorkoutRepository
from ..errors import StoreError
from ..models.session import WorkoutSession
from ..models.workout import WorkoutEntry

logger = logging.getLogger(__name__)


@dataclass
class CommitResult:
    """Outcome of saving a finished workout.

    ``entries`` holds the materialized records whether or not they reached
    the store; ``error`` is set when the write failed.
    """

    session: WorkoutSession
    entries: list[WorkoutEntry] = field(default_factory=list)
    error: StoreError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def set_count(self) -> int:
        return sum(len(e.sets) for e in self.entries)


class WorkoutLogService:
    """Finishes workout sessions and writes their entries to the store."""

    def __init__(self, workout_repo: WorkoutRepository | None = None):
        self.workout_repo = workout_repo or WorkoutRepository()

    async def commit(
        self, session: WorkoutSession, now: datetime | None = None
    ) -> CommitResult:
        """Finish a session and store its entries in one transaction.

        A store failure is logged and returned in the result. It is not
        retried; the caller decides what to tell the user.
        """
        finished = session.finish(now)
        result = CommitResult(session=finished.session, entries=finished.entries)
        if not finished.entries:
            logger.info("Workout finished with no completed sets; nothing to save")
            return result

        try:
            await self.workout_repo.add_many(finished.entries)
        except StoreError as e:
            logger.error("Failed to save workout: %s", e)
            result.error = e
            return result

        logger.info(
            "Saved workout: %d entries, %d sets", len(result.entries), result.set_count
        )
        return result

    async def delete_entry(self, entry_id: str) -> None:
        """Delete a single logged entry and its sets."""
        await self.workout_repo.delete(entry_id)
        logger.info("Deleted workout entry %s", entry_id)

    async def clear_history(self) -> int:
        """Delete every logged entry, keeping exercises and routines."""
        deleted = await self.workout_repo.clear()
        logger.info("Cleared workout history (%d entries)", deleted)
        return deleted

    async def delete_day(self, day: date) -> int:
        """Delete every entry logged on one calendar day."""
        deleted = await self.workout_repo.delete_day(day)
        logger.info("Deleted %d workout entries from %s", deleted, day.isoformat())
        return deleted
