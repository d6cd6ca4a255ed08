"""Domain models for pantry inventory."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UnitBrief:
    """Measurement unit as stored in the units table."""

    id: int
    name_pl: str
    abbreviation: str


@dataclass(frozen=True)
class ProductBrief:
    """Catalog product linked from an inventory row."""

    id: int
    name_pl: str


@dataclass(frozen=True)
class InventoryRecord:
    """Raw inventory row with its joined product and unit."""

    id: str
    product: ProductBrief | None
    custom_name: str | None
    quantity: float | None
    unit: UnitBrief | None
    is_staple: bool
    is_available: bool


@dataclass(frozen=True)
class InventoryItemForMatching:
    """Flattened inventory entry used by the matching engine."""

    id: str
    name: str
    quantity: float | None
    unit: str | None
    is_available: bool
