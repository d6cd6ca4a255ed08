"""Models for items produced by the receipt extraction step."""

from pydantic import BaseModel, Field


class ExtractedReceiptItem(BaseModel):
    """Single product line read from a receipt."""

    name: str = Field(min_length=1)
    quantity: float | None = Field(default=None, ge=0)
    unit: str | None = None
    confidence: float = Field(ge=0.0, le=1.0)
