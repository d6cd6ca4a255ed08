"""Supabase repository for the product catalog and units."""

import re
from dataclasses import dataclass

from supabase import Client

from mealer.domain.catalog import CatalogEntry
from mealer.domain.inventory import UnitBrief
from mealer.services.catalog import CatalogRepository

_ILIKE_SPECIAL = re.compile(r"[%_\\]")


@dataclass
class SupabaseCatalogRepository(CatalogRepository):
    """Supabase implementation for catalog lookups."""

    client: Client
    text_search_config: str = "simple"

    def search_full_text(self, query: str, limit: int) -> list[CatalogEntry]:
        """Search the product search_vector with websearch syntax."""
        response = (
            self.client.table("product_catalog")
            .select("id, name_pl")
            .text_search(
                "search_vector",
                query,
                options={"type": "websearch", "config": self.text_search_config},
            )
            .limit(limit)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def search_contains(self, query: str, limit: int) -> list[CatalogEntry]:
        """Search product names with a case-insensitive substring pattern."""
        pattern = f"%{escape_ilike(query)}%"
        response = (
            self.client.table("product_catalog")
            .select("id, name_pl")
            .ilike("name_pl", pattern)
            .order("name_pl")
            .limit(limit)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def get_default_unit(self, product_id: int) -> UnitBrief | None:
        """Return the product's default unit via the units relation."""
        response = (
            self.client.table("product_catalog")
            .select("id, default_unit:units(id, name_pl, abbreviation)")
            .eq("id", product_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        unit_row = response.data[0].get("default_unit")
        if not isinstance(unit_row, dict):
            return None
        return _parse_unit(unit_row)

    def list_units(self) -> list[UnitBrief]:
        """Return all units ordered by type and name."""
        response = (
            self.client.table("units")
            .select("id, name_pl, abbreviation")
            .order("unit_type")
            .order("name_pl")
            .execute()
        )
        return [_parse_unit(row) for row in response.data or []]


def escape_ilike(value: str) -> str:
    """Escape %, _ and backslash for ILIKE patterns."""
    return _ILIKE_SPECIAL.sub(lambda match: "\\" + match.group(0), value)


def _parse_entry(row: dict[str, object]) -> CatalogEntry:
    return CatalogEntry(id=int(row["id"]), name_pl=str(row.get("name_pl", "")))


def _parse_unit(row: dict[str, object]) -> UnitBrief:
    return UnitBrief(
        id=int(row["id"]),
        name_pl=str(row.get("name_pl", "")),
        abbreviation=str(row.get("abbreviation") or ""),
    )
