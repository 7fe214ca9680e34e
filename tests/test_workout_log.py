"""Tests for committing finished workouts."""

from datetime import date, datetime

import pytest

from liftlog.db import ExerciseRepository, WorkoutRepository
from liftlog.models.exercise import Exercise
from liftlog.models.session import SessionState, WorkoutSession
from liftlog.services import WorkoutLogService

STARTED = datetime(2026, 10, 14, 17, 0)
FINISHED_AT = datetime(2026, 10, 14, 18, 0)


def session_with_sets(exercise, sets):
    session = WorkoutSession.start(now=STARTED).add_exercise(exercise)
    for index, (weight, reps) in enumerate(sets):
        if index:
            session = session.add_set(0)
        session = session.update_set(0, index, weight=weight, reps=reps)
        session = session.complete_set(0, index)
    return session


@pytest.fixture
def workouts(db_path):
    return WorkoutRepository(db_path)


@pytest.fixture
def service(workouts):
    return WorkoutLogService(workouts)


class TestCommit:
    """Tests for WorkoutLogService.commit."""

    async def test_commit_stores_entries(self, db_path, bench, workouts, service):
        await ExerciseRepository(db_path).add(bench)
        session = session_with_sets(bench, [("100", "5"), ("0", "0"), ("105", "3")])

        result = await service.commit(session, FINISHED_AT)

        assert result.ok
        assert result.session.state == SessionState.FINISHED
        assert result.set_count == 2
        stored = await workouts.list_all()
        assert len(stored) == 1
        assert stored[0].date == FINISHED_AT
        assert [(s.set_number, s.weight) for s in stored[0].sets] == [(1, 100), (2, 105)]

    async def test_nothing_completed_saves_nothing(self, db_path, bench, workouts, service):
        await ExerciseRepository(db_path).add(bench)
        session = WorkoutSession.start(now=STARTED).add_exercise(bench)

        result = await service.commit(session, FINISHED_AT)

        assert result.ok
        assert result.entries == []
        assert await workouts.count() == 0

    async def test_store_failure_is_reported(self, workouts, service):
        unsaved = Exercise(name="Nordic Curl", category="Legs")
        session = session_with_sets(unsaved, [("0", "8")])

        result = await service.commit(session, FINISHED_AT)

        assert not result.ok
        assert len(result.entries) == 1
        assert await workouts.count() == 0


class TestHistory:
    """Tests for deleting logged history."""

    async def test_delete_and_clear(self, db_path, bench, workouts, service, make_entry):
        await ExerciseRepository(db_path).add(bench)
        first = make_entry(bench, datetime(2026, 10, 1))
        await workouts.add_many([first, make_entry(bench, datetime(2026, 10, 2))])

        await service.delete_entry(first.id)
        assert await workouts.count() == 1

        assert await service.clear_history() == 1
        assert await workouts.count() == 0

    async def test_delete_day(self, db_path, bench, workouts, service, make_entry):
        await ExerciseRepository(db_path).add(bench)
        await workouts.add_many(
            [
                make_entry(bench, datetime(2026, 10, 1, 7)),
                make_entry(bench, datetime(2026, 10, 1, 20)),
                make_entry(bench, datetime(2026, 10, 2, 7)),
            ]
        )

        assert await service.delete_day(date(2026, 10, 1)) == 2

        remaining = await workouts.list_all()
        assert [e.date for e in remaining] == [datetime(2026, 10, 2, 7)]
