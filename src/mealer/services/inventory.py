"""Inventory snapshot access and projection for matching."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from mealer.domain.inventory import InventoryItemForMatching, InventoryRecord

UNKNOWN_ITEM_NAME = "Unknown"


class InventoryRepository(Protocol):
    """Persistence interface for a user's pantry."""

    def list_available_items(self, user_id: UUID, limit: int) -> list[InventoryRecord]:
        """Return available inventory rows for a user."""


def project_item(record: InventoryRecord) -> InventoryItemForMatching:
    """Flatten a raw inventory row into the shape used by the matcher."""
    if record.custom_name:
        name = record.custom_name
    elif record.product is not None and record.product.name_pl:
        name = record.product.name_pl
    else:
        name = UNKNOWN_ITEM_NAME

    return InventoryItemForMatching(
        id=record.id,
        name=name,
        quantity=record.quantity,
        unit=record.unit.abbreviation if record.unit is not None else None,
        is_available=record.is_available,
    )


def project_items(records: list[InventoryRecord]) -> list[InventoryItemForMatching]:
    """Project a list of inventory rows, preserving order."""
    return [project_item(record) for record in records]


@dataclass
class InventoryService:
    """Provides the inventory snapshot for one analysis request."""

    repository: InventoryRepository
    snapshot_limit: int = 100

    def snapshot(self, user_id: UUID) -> list[InventoryItemForMatching]:
        """Return the user's available items projected for matching."""
        records = self.repository.list_available_items(user_id, self.snapshot_limit)
        return project_items(records)
