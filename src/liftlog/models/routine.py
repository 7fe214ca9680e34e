"""Routines: named, ordered lists of exercises."""

from dataclasses import dataclass, field
from typing import Iterable

from .exercise import Exercise, new_id


def _dedupe(exercises: Iterable[Exercise]) -> list[Exercise]:
    """Drop repeated exercises by id, keeping the first occurrence."""
    seen: set[str] = set()
    result = []
    for exercise in exercises:
        if exercise.id in seen:
            continue
        seen.add(exercise.id)
        result.append(exercise)
    return result


def order_from_membership(
    members: Iterable[Exercise], order_ids: Iterable[str]
) -> list[Exercise]:
    """Rebuild an ordered exercise list from a membership set and an id order.

    Ids in the order that are not members are dropped. Members missing from
    the order are appended, sorted by name so the result is stable.
    """
    lookup = {ex.id: ex for ex in members}
    result = []
    placed: set[str] = set()
    for exercise_id in order_ids:
        exercise = lookup.get(exercise_id)
        if exercise is None or exercise_id in placed:
            continue
        result.append(exercise)
        placed.add(exercise_id)

    stragglers = [ex for ex_id, ex in lookup.items() if ex_id not in placed]
    result.extend(sorted(stragglers, key=lambda ex: (ex.name, ex.id)))
    return result


@dataclass
class Routine:
    """A named routine.

    Membership and order are the same list, so they cannot disagree.
    All edits go through the methods below.
    """

    name: str
    exercises: list[Exercise] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    def __post_init__(self):
        self.exercises = _dedupe(self.exercises)

    @property
    def exercise_ids(self) -> list[str]:
        return [ex.id for ex in self.exercises]

    def contains(self, exercise: Exercise) -> bool:
        return exercise.id in self.exercise_ids

    def ordered_exercises(self) -> list[Exercise]:
        """Exercises in their saved order."""
        return list(self.exercises)

    def set_exercises(self, exercises: Iterable[Exercise]) -> None:
        """Replace membership and order together."""
        self.exercises = _dedupe(exercises)

    def add_exercises(self, exercises: Iterable[Exercise]) -> None:
        """Append exercises that are not already in the routine."""
        self.set_exercises([*self.exercises, *exercises])

    def move_exercise(self, source: int, destination: int) -> None:
        """Move the exercise at ``source`` so it ends up at ``destination``.

        Args:
            source: Current index of the exercise
            destination: Index in the list once the exercise has been removed

        Raises:
            IndexError: If either index is out of range
        """
        exercises = list(self.exercises)
        if not 0 <= source < len(exercises):
            raise IndexError(f"No exercise at position {source}")
        if not 0 <= destination < len(exercises):
            raise IndexError(f"Cannot move to position {destination}")
        exercise = exercises.pop(source)
        exercises.insert(destination, exercise)
        self.set_exercises(exercises)

    def remove_exercise(self, index: int) -> Exercise:
        """Remove and return the exercise at ``index``."""
        if not 0 <= index < len(self.exercises):
            raise IndexError(f"No exercise at position {index}")
        exercises = list(self.exercises)
        removed = exercises.pop(index)
        self.set_exercises(exercises)
        return removed

    def apply_selection(self, selected: Iterable[Exercise]) -> None:
        """Sync the routine with a picker selection.

        Existing members that are still selected keep their order; newly
        selected exercises are appended in the order given.
        """
        selected = _dedupe(selected)
        selected_ids = {ex.id for ex in selected}
        kept = [ex for ex in self.exercises if ex.id in selected_ids]
        kept_ids = {ex.id for ex in kept}
        self.set_exercises(kept + [ex for ex in selected if ex.id not in kept_ids])

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "name": self.name,
            "exercises": [ex.to_dict() for ex in self.exercises],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Routine":
        """Create from dictionary."""
        kwargs = {}
        if data.get("id"):
            kwargs["id"] = data["id"]
        return cls(
            name=data["name"],
            exercises=[Exercise.from_dict(ex) for ex in data.get("exercises", [])],
            **kwargs,
        )
