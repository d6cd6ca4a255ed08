"""Recipe ingredient models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RecipeIngredient:
    """One ingredient line extracted from a recipe."""

    name: str
    quantity: float | None = None
    unit: str | None = None
