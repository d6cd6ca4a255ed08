"""Resolve recipe ingredients against the pantry inventory."""

from dataclasses import dataclass, field

from mealer.domain.analysis import IngredientAnalysis, IngredientStatus
from mealer.domain.inventory import InventoryItemForMatching
from mealer.domain.recipes import RecipeIngredient
from mealer.services.similarity import LevenshteinMatcher, NameMatcher, normalize_name
from mealer.services.substitutions import (
    StaticSubstitutionSuggester,
    SubstitutionSuggester,
    to_matched_item,
)


@dataclass
class IngredientResolver:
    """Classifies each ingredient as available, partial or missing.

    Candidate selection is first-sufficient-match: an exact (case-folded) name
    wins, otherwise the first available item the matcher accepts, in inventory
    order. Later items are never compared for a better score, which keeps the
    result deterministic for a given inventory order.
    """

    matcher: NameMatcher = field(default_factory=LevenshteinMatcher)
    suggester: SubstitutionSuggester = field(
        default_factory=StaticSubstitutionSuggester
    )

    def resolve(
        self,
        ingredients: list[RecipeIngredient],
        inventory: list[InventoryItemForMatching],
    ) -> dict[str, IngredientAnalysis]:
        """Return the analysis for each ingredient keyed by ingredient name."""
        available = [item for item in inventory if item.is_available]
        results: dict[str, IngredientAnalysis] = {}
        for ingredient in ingredients:
            results[ingredient.name] = self.analyze(ingredient, available)
        return results

    def analyze(
        self,
        ingredient: RecipeIngredient,
        available: list[InventoryItemForMatching],
    ) -> IngredientAnalysis:
        """Analyze one ingredient against already-filtered available items."""
        candidate = self.find_candidate(ingredient.name, available)
        if candidate is None:
            return IngredientAnalysis(
                ingredient_name=ingredient.name,
                status="missing",
                matched_item=None,
                substitution=self.suggester.suggest(ingredient.name, available),
            )

        status = _classify(ingredient, candidate)
        matched = to_matched_item(candidate)
        substitution = None
        if status != "available":
            substitution = self.suggester.suggest(ingredient.name, available, matched)
        return IngredientAnalysis(
            ingredient_name=ingredient.name,
            status=status,
            matched_item=matched,
            substitution=substitution,
        )

    def find_candidate(
        self, name: str, inventory: list[InventoryItemForMatching]
    ) -> InventoryItemForMatching | None:
        """Return the exact match if any, else the first sufficient match."""
        normalized = normalize_name(name)
        if not normalized:
            return None
        available = [item for item in inventory if item.is_available]
        for item in available:
            if normalize_name(item.name) == normalized:
                return item
        for item in available:
            if self.matcher.is_match(name, item.name):
                return item
        return None


def _classify(
    ingredient: RecipeIngredient, candidate: InventoryItemForMatching
) -> IngredientStatus:
    if ingredient.quantity is None or candidate.quantity is None:
        return "available"
    if candidate.quantity >= ingredient.quantity:
        return "available"
    return "partial"
