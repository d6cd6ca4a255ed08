"""Shared test fixtures."""

import threading
from dataclasses import dataclass, field
from datetime import date
from uuid import UUID, uuid4

import pytest

from mealer.config import Settings
from mealer.containers import AppContainer
from mealer.domain.catalog import CatalogEntry
from mealer.domain.inventory import (
    InventoryItemForMatching,
    InventoryRecord,
    ProductBrief,
    UnitBrief,
)
from mealer.domain.profiles import ProfileRecord
from mealer.domain.usage import DailyUsage, UsageKind
from mealer.services.analysis import SubstitutionService
from mealer.services.auth import AuthClient, AuthService
from mealer.services.catalog import CatalogRepository, CatalogService
from mealer.services.inventory import InventoryRepository, InventoryService
from mealer.services.profiles import ProfileRepository, ProfileService
from mealer.services.receipts import ReceiptScanService
from mealer.services.recipe_warnings import WarningGenerator
from mealer.services.resolver import IngredientResolver
from mealer.services.usage import ConfigRepository, UsageLedger, UsageRepository

TODAY = date(2026, 1, 20)
ACCESS_TOKEN = "valid-token"


@dataclass
class InMemoryUsageRepository(UsageRepository):
    """In-memory usage repository with an atomic increment."""

    rows: dict[tuple[UUID, date], DailyUsage] = field(default_factory=dict)
    fail_reads: bool = False
    fail_increments: bool = False
    increments: list[tuple[UUID, date, UsageKind]] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def get_daily_usage(self, user_id: UUID, day: date) -> DailyUsage | None:
        if self.fail_reads:
            raise RuntimeError("usage table unavailable")
        return self.rows.get((user_id, day))

    def increment_usage(self, user_id: UUID, day: date, kind: UsageKind) -> None:
        if self.fail_increments:
            raise RuntimeError("usage table unavailable")
        with self._lock:
            current = self.rows.get(
                (user_id, day), DailyUsage(receipt_scan_count=0, substitution_count=0)
            )
            if kind == "receipt_scans":
                updated = DailyUsage(
                    receipt_scan_count=current.receipt_scan_count + 1,
                    substitution_count=current.substitution_count,
                )
            else:
                updated = DailyUsage(
                    receipt_scan_count=current.receipt_scan_count,
                    substitution_count=current.substitution_count + 1,
                )
            self.rows[(user_id, day)] = updated
            self.increments.append((user_id, day, kind))


@dataclass
class InMemoryConfigRepository(ConfigRepository):
    """In-memory system configuration."""

    values: dict[str, object] = field(default_factory=dict)
    fail: bool = False

    def get_value(self, key: str) -> object | None:
        if self.fail:
            raise RuntimeError("config table unavailable")
        return self.values.get(key)


@dataclass
class InMemoryInventoryRepository(InventoryRepository):
    """In-memory pantry rows per user."""

    records: dict[UUID, list[InventoryRecord]] = field(default_factory=dict)

    def list_available_items(self, user_id: UUID, limit: int) -> list[InventoryRecord]:
        rows = [row for row in self.records.get(user_id, []) if row.is_available]
        return rows[:limit]


@dataclass
class InMemoryCatalogRepository(CatalogRepository):
    """In-memory catalog with canned full-text results."""

    products: list[CatalogEntry] = field(default_factory=list)
    full_text: dict[str, list[CatalogEntry]] = field(default_factory=dict)
    default_units: dict[int, UnitBrief] = field(default_factory=dict)
    units: list[UnitBrief] = field(default_factory=list)

    def search_full_text(self, query: str, limit: int) -> list[CatalogEntry]:
        return self.full_text.get(query, [])[:limit]

    def search_contains(self, query: str, limit: int) -> list[CatalogEntry]:
        needle = query.casefold()
        hits = [item for item in self.products if needle in item.name_pl.casefold()]
        return hits[:limit]

    def get_default_unit(self, product_id: int) -> UnitBrief | None:
        return self.default_units.get(product_id)

    def list_units(self) -> list[UnitBrief]:
        return list(self.units)


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profiles keyed by user id."""

    profiles: dict[UUID, ProfileRecord] = field(default_factory=dict)

    def get_profile(self, user_id: UUID) -> ProfileRecord | None:
        return self.profiles.get(user_id)


@dataclass
class FakeAuthClient(AuthClient):
    """Auth client accepting a fixed set of tokens."""

    tokens: dict[str, UUID] = field(default_factory=dict)

    def get_user_id(self, access_token: str) -> UUID | None:
        return self.tokens.get(access_token)


GRAMS = UnitBrief(id=1, name_pl="gram", abbreviation="g")
KILOGRAMS = UnitBrief(id=2, name_pl="kilogram", abbreviation="kg")
LITRES = UnitBrief(id=3, name_pl="litr", abbreviation="l")
PIECES = UnitBrief(id=4, name_pl="sztuka", abbreviation="szt.")


def make_item(
    item_id: str,
    name: str,
    quantity: float | None = None,
    unit: str | None = None,
    is_available: bool = True,
) -> InventoryItemForMatching:
    """Build a projected inventory item."""
    return InventoryItemForMatching(
        id=item_id,
        name=name,
        quantity=quantity,
        unit=unit,
        is_available=is_available,
    )


def make_record(  # noqa: PLR0913
    record_id: str,
    product_name: str | None = None,
    custom_name: str | None = None,
    quantity: float | None = None,
    unit: UnitBrief | None = None,
    is_available: bool = True,
) -> InventoryRecord:
    """Build a raw inventory row."""
    return InventoryRecord(
        id=record_id,
        product=(
            ProductBrief(id=1, name_pl=product_name)
            if product_name is not None
            else None
        ),
        custom_name=custom_name,
        quantity=quantity,
        unit=unit,
        is_staple=False,
        is_available=is_available,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        openai_api_key="openai-key",
    )


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest.fixture
def usage_repository() -> InMemoryUsageRepository:
    return InMemoryUsageRepository()


@pytest.fixture
def config_repository() -> InMemoryConfigRepository:
    return InMemoryConfigRepository()


@pytest.fixture
def inventory_repository() -> InMemoryInventoryRepository:
    return InMemoryInventoryRepository()


@pytest.fixture
def catalog_repository() -> InMemoryCatalogRepository:
    return InMemoryCatalogRepository(units=[GRAMS, KILOGRAMS, LITRES, PIECES])


@pytest.fixture
def profile_repository(user_id: UUID) -> InMemoryProfileRepository:
    return InMemoryProfileRepository(
        profiles={
            user_id: ProfileRecord(
                user_id=user_id,
                allergies=["gluten"],
                diets=[],
                onboarding_status="completed",
            )
        }
    )


@pytest.fixture
def usage_ledger(
    usage_repository: InMemoryUsageRepository,
    config_repository: InMemoryConfigRepository,
) -> UsageLedger:
    return UsageLedger(
        repository=usage_repository,
        config_repository=config_repository,
        today=lambda: TODAY,
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    user_id: UUID,
    usage_ledger: UsageLedger,
    inventory_repository: InMemoryInventoryRepository,
    catalog_repository: InMemoryCatalogRepository,
    profile_repository: InMemoryProfileRepository,
) -> AppContainer:
    substitution_service = SubstitutionService(
        usage_ledger=usage_ledger,
        inventory_service=InventoryService(inventory_repository),
        resolver=IngredientResolver(),
        warning_generator=WarningGenerator(),
    )
    receipt_scan_service = ReceiptScanService(
        usage_ledger=usage_ledger,
        catalog_service=CatalogService(catalog_repository),
    )
    return AppContainer(
        settings=settings,
        auth_service=AuthService(FakeAuthClient(tokens={ACCESS_TOKEN: user_id})),
        profile_service=ProfileService(profile_repository),
        usage_ledger=usage_ledger,
        substitution_service=substitution_service,
        receipt_scan_service=receipt_scan_service,
    )
