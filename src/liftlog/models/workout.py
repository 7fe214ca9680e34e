"""Logged workout entries and their sets."""

from dataclasses import dataclass, field
from datetime import date, datetime

from .exercise import Exercise, new_id


@dataclass
class SetEntry:
    """One set of repetitions at a given weight."""

    set_number: int  # 1-based position within the parent entry
    weight: float
    reps: int
    is_warmup: bool = False
    id: str = field(default_factory=new_id)

    @property
    def volume(self) -> float:
        """Weight multiplied by reps."""
        return self.weight * self.reps

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "set_number": self.set_number,
            "weight": self.weight,
            "reps": self.reps,
            "is_warmup": self.is_warmup,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SetEntry":
        """Create from dictionary."""
        kwargs = {}
        if data.get("id"):
            kwargs["id"] = data["id"]
        return cls(
            set_number=data["set_number"],
            weight=float(data["weight"]),
            reps=int(data["reps"]),
            is_warmup=data.get("is_warmup", False),
            **kwargs,
        )


@dataclass(frozen=True)
class Found:
    """An entry whose exercise still exists."""

    exercise: Exercise


@dataclass(frozen=True)
class Orphaned:
    """An entry whose exercise has been deleted."""

    entry_id: str


ExerciseRef = Found | Orphaned


@dataclass
class WorkoutEntry:
    """A single logged performance of one exercise on one date.

    The entry owns its sets; deleting the entry deletes them.
    """

    exercise: Exercise | None
    date: datetime
    sets: list[SetEntry] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    @property
    def exercise_ref(self) -> ExerciseRef:
        """Resolve the exercise reference."""
        if self.exercise is None:
            return Orphaned(self.id)
        return Found(self.exercise)

    @property
    def exercise_name(self) -> str | None:
        return self.exercise.name if self.exercise else None

    @property
    def sorted_sets(self) -> list[SetEntry]:
        """Sets ordered by set number."""
        return sorted(self.sets, key=lambda s: s.set_number)

    @property
    def max_weight(self) -> float:
        """Heaviest set weight, or 0 when there are no sets."""
        return max((s.weight for s in self.sets), default=0.0)

    @property
    def volume(self) -> float:
        """Sum of weight times reps over all sets."""
        return sum(s.volume for s in self.sets)

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "exercise": self.exercise.to_dict() if self.exercise else None,
            "date": self.date.isoformat(),
            "sets": [s.to_dict() for s in self.sorted_sets],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutEntry":
        """Create from dictionary."""
        kwargs = {}
        if data.get("id"):
            kwargs["id"] = data["id"]
        exercise = data.get("exercise")
        return cls(
            exercise=Exercise.from_dict(exercise) if exercise else None,
            date=datetime.fromisoformat(data["date"]),
            sets=[SetEntry.from_dict(s) for s in data.get("sets", [])],
            **kwargs,
        )


def local_day(moment: datetime) -> date:
    """Calendar day of a timestamp in the local timezone."""
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return moment.date()
