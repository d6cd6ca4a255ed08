"""Domain models for the product catalog."""

from dataclasses import dataclass

from mealer.domain.inventory import UnitBrief


@dataclass(frozen=True)
class CatalogEntry:
    """Canonical product matched from a free-text name."""

    id: int
    name_pl: str


@dataclass(frozen=True)
class ReceiptScanItem:
    """Extracted receipt line resolved against the catalog."""

    name: str
    matched_product: CatalogEntry | None
    quantity: float | None
    suggested_unit: UnitBrief | None
    confidence: float
