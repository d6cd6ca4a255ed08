"""OpenAI Responses API suggester for ingredient substitutions."""

import json
import logging
from dataclasses import dataclass, field

from openai import OpenAI

from mealer.domain.analysis import MatchedItem, SubstitutionSuggestion
from mealer.domain.inventory import InventoryItemForMatching
from mealer.services.substitutions import (
    StaticSubstitutionSuggester,
    SubstitutionSuggester,
    pick_substitute,
)

SUGGESTION_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {"suggestion": {"type": "string"}},
    "required": ["suggestion"],
    "additionalProperties": False,
}

_MAX_PANTRY_ITEMS_IN_PROMPT = 40
DEFAULT_TIMEOUT_SECONDS = 20.0

_logger = logging.getLogger(__name__)


@dataclass
class OpenAISubstitutionSuggester(SubstitutionSuggester):
    """Suggester that asks a model for the suggestion text.

    The substitute item is still picked deterministically from the pantry.
    Any model failure falls back to the static keyword suggester.
    """

    client: OpenAI
    model: str
    store: bool = False
    fallback: SubstitutionSuggester = field(
        default_factory=StaticSubstitutionSuggester
    )

    @classmethod
    def create(
        cls,
        api_key: str,
        model: str,
        store: bool = False,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> "OpenAISubstitutionSuggester":
        """Create a suggester with its own OpenAI client."""
        return cls(
            client=OpenAI(api_key=api_key, timeout=timeout), model=model, store=store
        )

    def suggest(
        self,
        ingredient_name: str,
        inventory: list[InventoryItemForMatching],
        matched_item: MatchedItem | None = None,
    ) -> SubstitutionSuggestion:
        """Return model text with a deterministic substitute item."""
        try:
            text = self._request_suggestion(ingredient_name, inventory)
        except Exception:
            _logger.exception(
                "Model suggestion failed, using keyword table",
                extra={"ingredient": ingredient_name},
            )
            return self.fallback.suggest(ingredient_name, inventory, matched_item)

        substitute = pick_substitute(ingredient_name, inventory, matched_item)
        return SubstitutionSuggestion(
            available=substitute is not None,
            suggestion=text,
            substitute_item=substitute,
        )

    def _request_suggestion(
        self, ingredient_name: str, inventory: list[InventoryItemForMatching]
    ) -> str:
        pantry = [item.name for item in inventory if item.is_available]
        pantry = pantry[:_MAX_PANTRY_ITEMS_IN_PROMPT]
        prompt = (
            "Zaproponuj krótko (1-2 zdania, po polsku) zamiennik składnika "
            f'"{ingredient_name}". '
            "Preferuj produkty z listy dostępnych w spiżarni: "
            f"{', '.join(pantry) if pantry else 'brak'}."
        )
        response = self.client.responses.create(
            model=self.model,
            input=[{"role": "user", "content": [{"type": "input_text", "text": prompt}]}],
            text={
                "format": {
                    "type": "json_schema",
                    "name": "substitution_suggestion",
                    "strict": True,
                    "schema": SUGGESTION_SCHEMA,
                }
            },
            store=self.store,
        )
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        suggestion = json.loads(output_text).get("suggestion")
        if not isinstance(suggestion, str) or not suggestion.strip():
            raise RuntimeError("OpenAI returned no suggestion text")
        return suggestion.strip()
