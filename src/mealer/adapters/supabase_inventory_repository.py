"""Supabase repository for pantry inventory rows."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from mealer.domain.inventory import InventoryRecord, ProductBrief, UnitBrief
from mealer.services.inventory import InventoryRepository

_INVENTORY_SELECT = (
    "id, custom_name, quantity, is_staple, is_available, "
    "product:product_catalog(id, name_pl), "
    "unit:units(id, name_pl, abbreviation)"
)


@dataclass
class SupabaseInventoryRepository(InventoryRepository):
    """Supabase implementation for inventory reads."""

    client: Client

    def list_available_items(self, user_id: UUID, limit: int) -> list[InventoryRecord]:
        """Return the user's available items, newest first."""
        response = (
            self.client.table("inventory_items")
            .select(_INVENTORY_SELECT)
            .eq("user_id", str(user_id))
            .eq("is_available", True)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_item(row) for row in response.data or []]


def _parse_item(row: dict[str, object]) -> InventoryRecord:
    """Parse an inventory row with its joined relations."""
    product_row = row.get("product")
    unit_row = row.get("unit")
    quantity = row.get("quantity")
    return InventoryRecord(
        id=str(row["id"]),
        product=(
            ProductBrief(id=int(product_row["id"]), name_pl=str(product_row["name_pl"]))
            if isinstance(product_row, dict)
            else None
        ),
        custom_name=row.get("custom_name"),
        quantity=float(quantity) if quantity is not None else None,
        unit=(
            UnitBrief(
                id=int(unit_row["id"]),
                name_pl=str(unit_row.get("name_pl", "")),
                abbreviation=str(unit_row.get("abbreviation") or ""),
            )
            if isinstance(unit_row, dict)
            else None
        ),
        is_staple=bool(row.get("is_staple", False)),
        is_available=bool(row.get("is_available", False)),
    )
