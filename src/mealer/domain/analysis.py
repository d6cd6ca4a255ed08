"""Models for ingredient analysis results."""

from dataclasses import dataclass
from typing import Literal

IngredientStatus = Literal["available", "partial", "missing"]
WarningType = Literal["allergy", "diet", "equipment"]


@dataclass(frozen=True)
class MatchedItem:
    """Reference to an inventory item picked for an ingredient."""

    id: str
    name: str
    quantity: float | None
    unit: str | None


@dataclass(frozen=True)
class SubstitutionSuggestion:
    """Suggestion offered when an ingredient is not fully available."""

    available: bool
    suggestion: str
    substitute_item: MatchedItem | None


@dataclass(frozen=True)
class IngredientAnalysis:
    """Availability analysis for a single recipe ingredient."""

    ingredient_name: str
    status: IngredientStatus
    matched_item: MatchedItem | None
    substitution: SubstitutionSuggestion | None = None
    allergy_warning: str | None = None


@dataclass(frozen=True)
class RecipeWarning:
    """Recipe-level notice about an allergy or diet conflict."""

    type: WarningType
    message: str
