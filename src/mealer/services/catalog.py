"""Product catalog and unit resolution for free-text names."""

from dataclasses import dataclass
from typing import Protocol

from mealer.domain.catalog import CatalogEntry
from mealer.domain.inventory import UnitBrief
from mealer.services.similarity import normalize_name


class CatalogRepository(Protocol):
    """Persistence interface for the product catalog and unit table."""

    def search_full_text(self, query: str, limit: int) -> list[CatalogEntry]:
        """Return products ranked by full-text relevance."""

    def search_contains(self, query: str, limit: int) -> list[CatalogEntry]:
        """Return products whose name contains the query."""

    def get_default_unit(self, product_id: int) -> UnitBrief | None:
        """Return the configured default unit of a product, if any."""

    def list_units(self) -> list[UnitBrief]:
        """Return all canonical units."""


@dataclass
class CatalogService:
    """Maps extracted names to catalog products and units."""

    repository: CatalogRepository

    def match_product(self, name: str) -> CatalogEntry | None:
        """Return the best catalog hit: full-text first, then substring."""
        query = name.strip()
        if not query:
            return None
        hits = self.repository.search_full_text(query, limit=1)
        if hits:
            return hits[0]
        hits = self.repository.search_contains(query, limit=1)
        if hits:
            return hits[0]
        return None

    def suggest_unit(
        self, product_id: int | None, unit_hint: str | None
    ) -> UnitBrief | None:
        """Return the product default unit, else the unit matching the hint."""
        if product_id is not None:
            default_unit = self.repository.get_default_unit(product_id)
            if default_unit is not None:
                return default_unit
        if unit_hint and unit_hint.strip():
            return match_unit(unit_hint, self.repository.list_units())
        return None


def match_unit(hint: str, units: list[UnitBrief]) -> UnitBrief | None:
    """Match a free-text unit hint by abbreviation or name.

    Exact abbreviation wins over exact name, which wins over a partial hit.
    Trailing dots are ignored so "szt" finds "szt.".
    """
    wanted = _unit_key(hint)
    if not wanted:
        return None
    for unit in units:
        if _unit_key(unit.abbreviation) == wanted:
            return unit
    for unit in units:
        if _unit_key(unit.name_pl) == wanted:
            return unit
    for unit in units:
        if wanted in _unit_key(unit.abbreviation) or wanted in _unit_key(unit.name_pl):
            return unit
    return None


def _unit_key(value: str) -> str:
    return normalize_name(value).rstrip(".")
