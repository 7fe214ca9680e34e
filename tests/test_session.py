"""Tests for the workout session builder."""

from datetime import datetime, timedelta

import pytest

from liftlog.errors import SessionFinishedError
from liftlog.models.routine import Routine
from liftlog.models.session import (
    SessionState,
    WorkoutSession,
    format_elapsed,
    parse_reps,
    parse_weight,
)

STARTED = datetime(2026, 10, 14, 17, 0)
FINISHED_AT = datetime(2026, 10, 14, 18, 0)


def log_set(session, exercise_index, set_index, weight, reps, is_warmup=False):
    session = session.update_set(
        exercise_index, set_index, weight=weight, reps=reps, is_warmup=is_warmup
    )
    return session.complete_set(exercise_index, set_index)


class TestParsing:
    """Tests for numeric field parsing."""

    def test_parse_weight(self):
        assert parse_weight("102.5") == 102.5
        assert parse_weight(" 80 ") == 80.0

    def test_malformed_weight_is_zero(self):
        for text in ("", "abc", "-5", "nan", "inf"):
            assert parse_weight(text) == 0.0

    def test_parse_reps(self):
        assert parse_reps("8") == 8

    def test_malformed_reps_is_zero(self):
        for text in ("", "five", "5.5", "-3"):
            assert parse_reps(text) == 0


class TestSessionCommands:
    """Tests for editing a session."""

    def test_states(self, bench):
        """Test empty, in progress and finished states."""
        session = WorkoutSession.start(now=STARTED)
        assert session.state == SessionState.EMPTY

        session = session.add_exercise(bench)
        assert session.state == SessionState.IN_PROGRESS

        finished = session.finish(FINISHED_AT)
        assert finished.session.state == SessionState.FINISHED

    def test_add_exercise_seeds_one_empty_set(self, bench):
        session = WorkoutSession.start(now=STARTED).add_exercise(bench)

        sets = session.exercises[0].sets
        assert len(sets) == 1
        assert (sets[0].weight, sets[0].reps, sets[0].is_warmup, sets[0].completed) == (
            "",
            "",
            False,
            False,
        )

    def test_add_exercise_is_idempotent(self, bench):
        """Test adding the same exercise twice changes nothing."""
        session = WorkoutSession.start(now=STARTED).add_exercise(bench)
        again = session.add_exercise(bench)

        assert again is session
        assert len(again.exercises) == 1

    def test_commands_return_new_state(self, bench):
        """Test the original session is left untouched."""
        session = WorkoutSession.start(now=STARTED).add_exercise(bench)
        updated = session.add_set(0)

        assert len(session.exercises[0].sets) == 1
        assert len(updated.exercises[0].sets) == 2

    def test_remove_set(self, bench):
        session = WorkoutSession.start(now=STARTED).add_exercise(bench).add_set(0)
        session = session.update_set(0, 1, weight="50")
        session = session.remove_set(0, 0)

        assert len(session.exercises[0].sets) == 1
        assert session.exercises[0].sets[0].weight == "50"

    def test_complete_set_does_not_validate(self, bench):
        session = WorkoutSession.start(now=STARTED).add_exercise(bench)
        session = session.update_set(0, 0, weight="heavy").complete_set(0, 0)

        assert session.exercises[0].sets[0].completed
        assert session.completed_set_count == 1

    def test_bad_indices(self, bench):
        session = WorkoutSession.start(now=STARTED).add_exercise(bench)

        with pytest.raises(IndexError):
            session.add_set(1)
        with pytest.raises(IndexError):
            session.complete_set(0, 3)
        with pytest.raises(IndexError):
            session.remove_set(0, 1)

    def test_start_from_routine(self, bench, squat):
        """Test a routine pre-fills exercises in its order."""
        routine = Routine(name="Full Body", exercises=[squat, bench])
        session = WorkoutSession.start(routine, now=STARTED)

        assert [d.exercise.name for d in session.exercises] == ["Squat", "Bench Press"]

    def test_finished_session_rejects_commands(self, bench):
        finished = WorkoutSession.start(now=STARTED).add_exercise(bench).finish(FINISHED_AT)

        with pytest.raises(SessionFinishedError):
            finished.session.add_set(0)
        with pytest.raises(SessionFinishedError):
            finished.session.finish()

    def test_discard(self, bench):
        session = WorkoutSession.start(now=STARTED).add_exercise(bench).discard()

        assert session.state == SessionState.FINISHED

    def test_elapsed(self):
        session = WorkoutSession.start(now=STARTED)

        assert session.elapsed(STARTED + timedelta(minutes=5, seconds=7)).total_seconds() == 307
        assert format_elapsed(307) == "05:07"

    def test_serialization_roundtrip(self, bench):
        session = WorkoutSession.start(now=STARTED).add_exercise(bench).add_set(0)
        session = log_set(session, 0, 1, "100", "5", is_warmup=True)

        assert WorkoutSession.from_dict(session.to_dict()) == session


class TestFinish:
    """Tests for materializing entries."""

    def test_zero_sets_dropped_and_renumbered(self, bench):
        """Test a blank completed set is discarded and survivors renumbered."""
        session = WorkoutSession.start(now=STARTED).add_exercise(bench).add_set(0)
        session = log_set(session, 0, 0, "100", "5")
        session = log_set(session, 0, 1, "0", "0")

        entries = session.finish(FINISHED_AT).entries

        assert len(entries) == 1
        assert entries[0].exercise == bench
        assert entries[0].date == FINISHED_AT
        assert len(entries[0].sets) == 1
        s = entries[0].sets[0]
        assert (s.weight, s.reps, s.set_number) == (100, 5, 1)

    def test_exercise_without_completed_sets_skipped(self, bench, squat):
        session = WorkoutSession.start(now=STARTED).add_exercises([bench, squat])
        session = session.update_set(1, 0, weight="140", reps="3")
        session = log_set(session, 0, 0, "100", "5")

        entries = session.finish(FINISHED_AT).entries

        assert [e.exercise.name for e in entries] == ["Bench Press"]

    def test_incomplete_sets_ignored(self, bench):
        """Test only completed rows count, renumbered in their original order."""
        session = WorkoutSession.start(now=STARTED).add_exercise(bench).add_set(0).add_set(0)
        session = log_set(session, 0, 0, "60", "10", is_warmup=True)
        session = session.update_set(0, 1, weight="90", reps="5")
        session = log_set(session, 0, 2, "100", "")

        sets = session.finish(FINISHED_AT).entries[0].sets

        assert [(s.set_number, s.weight, s.reps, s.is_warmup) for s in sets] == [
            (1, 60, 10, True),
            (2, 100, 0, False),
        ]

    def test_all_blank_completed_sets_give_empty_entry(self, bench):
        session = WorkoutSession.start(now=STARTED).add_exercise(bench)
        session = log_set(session, 0, 0, "", "")

        entries = session.finish(FINISHED_AT).entries

        assert len(entries) == 1
        assert entries[0].sets == []

    def test_empty_session_finishes_with_no_entries(self):
        assert WorkoutSession.start(now=STARTED).finish(FINISHED_AT).entries == []
