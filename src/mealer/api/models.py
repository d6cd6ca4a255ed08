"""Pydantic request models for the AI endpoints."""

from pydantic import BaseModel, Field, field_validator

from mealer.domain.receipts import ExtractedReceiptItem
from mealer.domain.recipes import RecipeIngredient

MAX_RECIPE_INGREDIENTS = 30
MAX_INGREDIENT_NAME_LENGTH = 200
MAX_RECEIPT_ITEMS = 100


class RecipeIngredientPayload(BaseModel):
    """Recipe ingredient submitted for analysis."""

    name: str = Field(min_length=1, max_length=MAX_INGREDIENT_NAME_LENGTH)
    quantity: float | None = Field(default=None, gt=0)
    unit: str | None = None

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("Ingredient name is required")
        return stripped

    def to_domain(self) -> RecipeIngredient:
        """Convert to the engine's ingredient model."""
        return RecipeIngredient(name=self.name, quantity=self.quantity, unit=self.unit)


class SubstitutionsRequest(BaseModel):
    """Body of POST /ai/substitutions."""

    recipe_ingredients: list[RecipeIngredientPayload] = Field(
        min_length=1, max_length=MAX_RECIPE_INGREDIENTS
    )


class ReceiptScanRequest(BaseModel):
    """Body of POST /ai/receipt-scans with already-extracted receipt lines."""

    items: list[ExtractedReceiptItem] = Field(
        min_length=1, max_length=MAX_RECEIPT_ITEMS
    )
