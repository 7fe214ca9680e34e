"""Exercise definitions."""

from dataclasses import dataclass, field
from uuid import uuid4


def new_id() -> str:
    """Generate an opaque record identifier."""
    return uuid4().hex


@dataclass
class Exercise:
    """An exercise that can be logged and added to routines.

    Names are unique by convention only; the store does not enforce it.
    """

    name: str
    category: str
    is_custom: bool = False  # True when added by the user rather than seeded
    id: str = field(default_factory=new_id)

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "is_custom": self.is_custom,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Exercise":
        """Create from dictionary."""
        kwargs = {}
        if data.get("id"):
            kwargs["id"] = data["id"]
        return cls(
            name=data["name"],
            category=data.get("category", ""),
            is_custom=data.get("is_custom", False),
            **kwargs,
        )


def group_by_category(exercises: list[Exercise]) -> dict[str, list[Exercise]]:
    """Group exercises by category.

    Categories are sorted alphabetically; exercises keep their input order.
    """
    grouped: dict[str, list[Exercise]] = {}
    for exercise in exercises:
        grouped.setdefault(exercise.category, []).append(exercise)
    return {category: grouped[category] for category in sorted(grouped)}
