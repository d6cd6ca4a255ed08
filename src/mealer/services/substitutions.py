"""Substitution suggestions for missing or short ingredients."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Protocol

from mealer.domain.analysis import MatchedItem, SubstitutionSuggestion
from mealer.domain.inventory import InventoryItemForMatching
from mealer.services.similarity import normalize_name

# Keyword contained in the case-folded ingredient name -> suggestion text.
# Checked in insertion order; the first hit wins.
SUBSTITUTION_SUGGESTIONS: MappingProxyType[str, str] = MappingProxyType(
    {
        "śmietanka": "Mleko kokosowe pełnotłuste daje podobny efekt w sosach.",
        "śmietana": (
            "Użyj jogurtu greckiego jako zamiennika - ma podobną konsystencję "
            "i dodaje kremowości."
        ),
        "masło": "Możesz zastąpić olejem roślinnym lub margaryną w proporcji 1:1.",
        "jajko": (
            "Jeden banan lub 3 łyżki aquafaby (wody z ciecierzycy) mogą zastąpić "
            "jedno jajko."
        ),
        "mleko": "Mleko roślinne (owsiane, migdałowe) jest dobrym zamiennikiem.",
        "mąka": "Jeśli potrzebujesz bezglutenowej, użyj mąki ryżowej lub z tapioki.",
        "cukier": "Miód lub syrop klonowy w ilości o 25% mniejszej.",
        "ser": "Tofu lub ser wegański dla diety roślinnej.",
    }
)

GENERIC_SUGGESTION_ITEMS = 3
NO_CANDIDATES_MESSAGE = "Brak dostępnych zamienników w Twoim inwentarzu."


class SubstitutionSuggester(Protocol):
    """Interface for producing substitution suggestions."""

    def suggest(
        self,
        ingredient_name: str,
        inventory: list[InventoryItemForMatching],
        matched_item: MatchedItem | None = None,
    ) -> SubstitutionSuggestion:
        """Return a suggestion for an ingredient that is not fully available."""


def to_matched_item(item: InventoryItemForMatching) -> MatchedItem:
    """Return the display reference for an inventory item."""
    return MatchedItem(
        id=item.id, name=item.name, quantity=item.quantity, unit=item.unit
    )


def suggestion_text(
    ingredient_name: str, inventory: list[InventoryItemForMatching]
) -> str:
    """Return keyword-table text or a generic hint built from the pantry."""
    name = normalize_name(ingredient_name)
    for keyword, suggestion in SUBSTITUTION_SUGGESTIONS.items():
        if keyword in name:
            return suggestion

    available = [item.name for item in inventory if item.is_available]
    if available:
        listed = ", ".join(available[:GENERIC_SUGGESTION_ITEMS])
        return (
            f"Sprawdź czy któryś z dostępnych produktów ({listed}) "
            "może być zamiennikiem."
        )
    return NO_CANDIDATES_MESSAGE


def pick_substitute(
    ingredient_name: str,
    inventory: list[InventoryItemForMatching],
    matched_item: MatchedItem | None = None,
) -> MatchedItem | None:
    """Pick the first available item other than the ingredient itself."""
    name = normalize_name(ingredient_name)
    matched_id = matched_item.id if matched_item else None
    for item in inventory:
        if not item.is_available:
            continue
        if normalize_name(item.name) == name or item.id == matched_id:
            continue
        return to_matched_item(item)
    return None


@dataclass
class StaticSubstitutionSuggester(SubstitutionSuggester):
    """Suggester backed by the static keyword table."""

    def suggest(
        self,
        ingredient_name: str,
        inventory: list[InventoryItemForMatching],
        matched_item: MatchedItem | None = None,
    ) -> SubstitutionSuggestion:
        """Return a keyword-based suggestion and a best-effort substitute."""
        substitute = pick_substitute(ingredient_name, inventory, matched_item)
        return SubstitutionSuggestion(
            available=substitute is not None,
            suggestion=suggestion_text(ingredient_name, inventory),
            substitute_item=substitute,
        )
