"""User preferences."""

from enum import Enum


class WeightUnit(str, Enum):
    """Unit used when displaying weights.

    This is a display label only. Stored weights are never converted.
    """

    LBS = "lbs"
    KG = "kg"

    @classmethod
    def default(cls) -> "WeightUnit":
        return cls.LBS

    def format(self, weight: float) -> str:
        """Format a weight with this unit, dropping a trailing .0."""
        if float(weight).is_integer():
            return f"{int(weight)} {self.value}"
        return f"{weight:g} {self.value}"
