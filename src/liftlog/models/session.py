"""Draft state for a workout in progress.

A ``WorkoutSession`` is an immutable value. Each command returns a new
session, which keeps the state easy to serialize and independent of how a
front end chooses to render it::

    session = WorkoutSession.start()
    session = session.add_exercise(bench)
    session = session.update_set(0, 0, weight="100", reps="5")
    session = session.complete_set(0, 0)
    finished = session.finish()
"""

import math
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from enum import Enum
from typing import Iterable

from ..errors import SessionFinishedError
from .exercise import Exercise, new_id
from .routine import Routine
from .workout import SetEntry, WorkoutEntry


class SessionState(str, Enum):
    """Lifecycle of a workout session."""

    EMPTY = "empty"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


def parse_weight(text: str) -> float:
    """Parse a weight field, defaulting to 0 for blank or malformed input."""
    try:
        value = float(text.strip())
    except (AttributeError, ValueError):
        return 0.0
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def parse_reps(text: str) -> int:
    """Parse a reps field, defaulting to 0 for blank or malformed input."""
    try:
        value = int(text.strip())
    except (AttributeError, ValueError):
        return 0
    return max(value, 0)


def format_elapsed(seconds: int) -> str:
    """Format elapsed seconds as MM:SS."""
    minutes, secs = divmod(max(int(seconds), 0), 60)
    return f"{minutes:02d}:{secs:02d}"


@dataclass(frozen=True)
class SetDraft:
    """A set row as typed by the user, before parsing."""

    weight: str = ""
    reps: str = ""
    is_warmup: bool = False
    completed: bool = False
    id: str = field(default_factory=new_id)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "weight": self.weight,
            "reps": self.reps,
            "is_warmup": self.is_warmup,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SetDraft":
        return cls(
            id=data["id"],
            weight=data.get("weight", ""),
            reps=data.get("reps", ""),
            is_warmup=data.get("is_warmup", False),
            completed=data.get("completed", False),
        )


@dataclass(frozen=True)
class ExerciseDraft:
    """One exercise in the active workout and its set rows."""

    exercise: Exercise
    sets: tuple[SetDraft, ...] = field(default_factory=lambda: (SetDraft(),))
    id: str = field(default_factory=new_id)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "exercise": self.exercise.to_dict(),
            "sets": [s.to_dict() for s in self.sets],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ExerciseDraft":
        return cls(
            id=data["id"],
            exercise=Exercise.from_dict(data["exercise"]),
            sets=tuple(SetDraft.from_dict(s) for s in data.get("sets", [])),
        )


@dataclass(frozen=True)
class FinishedWorkout:
    """Result of finishing a session: the final state and the new entries."""

    session: "WorkoutSession"
    entries: list[WorkoutEntry]


@dataclass(frozen=True)
class WorkoutSession:
    """An active workout: selected exercises and their draft sets."""

    started_at: datetime
    exercises: tuple[ExerciseDraft, ...] = ()
    finished: bool = False

    @classmethod
    def start(
        cls, routine: Routine | None = None, now: datetime | None = None
    ) -> "WorkoutSession":
        """Begin a session, optionally pre-filled from a routine."""
        session = cls(started_at=now or datetime.now())
        if routine is not None:
            session = session.add_exercises(routine.ordered_exercises())
        return session

    @property
    def state(self) -> SessionState:
        if self.finished:
            return SessionState.FINISHED
        if not self.exercises:
            return SessionState.EMPTY
        return SessionState.IN_PROGRESS

    @property
    def completed_set_count(self) -> int:
        return sum(1 for draft in self.exercises for s in draft.sets if s.completed)

    def has_exercise(self, exercise: Exercise) -> bool:
        return any(draft.exercise.id == exercise.id for draft in self.exercises)

    def elapsed(self, now: datetime | None = None) -> timedelta:
        """Time since the session started."""
        return (now or datetime.now()) - self.started_at

    def _check_open(self) -> None:
        if self.finished:
            raise SessionFinishedError("Workout session is already finished")

    def _draft(self, exercise_index: int) -> ExerciseDraft:
        if not 0 <= exercise_index < len(self.exercises):
            raise IndexError(f"No exercise at position {exercise_index}")
        return self.exercises[exercise_index]

    def _with_draft(self, exercise_index: int, draft: ExerciseDraft) -> "WorkoutSession":
        exercises = list(self.exercises)
        exercises[exercise_index] = draft
        return replace(self, exercises=tuple(exercises))

    def _with_set(
        self, exercise_index: int, set_index: int, **changes
    ) -> "WorkoutSession":
        draft = self._draft(exercise_index)
        if not 0 <= set_index < len(draft.sets):
            raise IndexError(f"No set at position {set_index}")
        sets = list(draft.sets)
        sets[set_index] = replace(sets[set_index], **changes)
        return self._with_draft(exercise_index, replace(draft, sets=tuple(sets)))

    def add_exercise(self, exercise: Exercise) -> "WorkoutSession":
        """Append an exercise with one empty set; no-op if already present."""
        self._check_open()
        if self.has_exercise(exercise):
            return self
        return replace(self, exercises=(*self.exercises, ExerciseDraft(exercise)))

    def add_exercises(self, exercises: Iterable[Exercise]) -> "WorkoutSession":
        session = self
        for exercise in exercises:
            session = session.add_exercise(exercise)
        return session

    def remove_exercise(self, exercise_index: int) -> "WorkoutSession":
        self._check_open()
        self._draft(exercise_index)
        exercises = list(self.exercises)
        del exercises[exercise_index]
        return replace(self, exercises=tuple(exercises))

    def add_set(self, exercise_index: int) -> "WorkoutSession":
        """Append an empty set row to an exercise."""
        self._check_open()
        draft = self._draft(exercise_index)
        return self._with_draft(
            exercise_index, replace(draft, sets=(*draft.sets, SetDraft()))
        )

    def remove_set(self, exercise_index: int, set_index: int) -> "WorkoutSession":
        self._check_open()
        draft = self._draft(exercise_index)
        if not 0 <= set_index < len(draft.sets):
            raise IndexError(f"No set at position {set_index}")
        sets = list(draft.sets)
        del sets[set_index]
        return self._with_draft(exercise_index, replace(draft, sets=tuple(sets)))

    def update_set(
        self,
        exercise_index: int,
        set_index: int,
        weight: str | None = None,
        reps: str | None = None,
        is_warmup: bool | None = None,
    ) -> "WorkoutSession":
        """Edit the raw fields of a set row. Omitted fields are unchanged."""
        self._check_open()
        changes = {}
        if weight is not None:
            changes["weight"] = weight
        if reps is not None:
            changes["reps"] = reps
        if is_warmup is not None:
            changes["is_warmup"] = is_warmup
        return self._with_set(exercise_index, set_index, **changes)

    def complete_set(self, exercise_index: int, set_index: int) -> "WorkoutSession":
        """Mark a set as done. Values are not validated here."""
        self._check_open()
        return self._with_set(exercise_index, set_index, completed=True)

    def discard(self) -> "WorkoutSession":
        """Abandon the workout without producing entries."""
        self._check_open()
        return replace(self, finished=True)

    def finish(self, now: datetime | None = None) -> FinishedWorkout:
        """Close the session and materialize entries for completed sets.

        Only completed sets count. Exercises without any are skipped. Sets
        whose weight and reps both parse to zero are dropped, and the rest are
        renumbered from 1 in their original order.
        """
        self._check_open()
        now = now or datetime.now()
        entries = []
        for draft in self.exercises:
            completed = [s for s in draft.sets if s.completed]
            if not completed:
                continue

            entry = WorkoutEntry(exercise=draft.exercise, date=now)
            for set_draft in completed:
                weight = parse_weight(set_draft.weight)
                reps = parse_reps(set_draft.reps)
                if weight == 0 and reps == 0:
                    continue
                entry.sets.append(
                    SetEntry(
                        set_number=len(entry.sets) + 1,
                        weight=weight,
                        reps=reps,
                        is_warmup=set_draft.is_warmup,
                    )
                )
            entries.append(entry)

        return FinishedWorkout(session=replace(self, finished=True), entries=entries)

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        return {
            "started_at": self.started_at.isoformat(),
            "exercises": [draft.to_dict() for draft in self.exercises],
            "finished": self.finished,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutSession":
        """Create from dictionary."""
        return cls(
            started_at=datetime.fromisoformat(data["started_at"]),
            exercises=tuple(ExerciseDraft.from_dict(d) for d in data.get("exercises", [])),
            finished=data.get("finished", False),
        )
