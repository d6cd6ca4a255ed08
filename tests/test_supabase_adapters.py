"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import date
from types import SimpleNamespace
from uuid import uuid4

from mealer.adapters.supabase_auth_client import SupabaseAuthClient
from mealer.adapters.supabase_catalog_repository import (
    SupabaseCatalogRepository,
    escape_ilike,
)
from mealer.adapters.supabase_config_repository import SupabaseConfigRepository
from mealer.adapters.supabase_inventory_repository import (
    SupabaseInventoryRepository,
)
from mealer.adapters.supabase_profile_repository import SupabaseProfileRepository
from mealer.adapters.supabase_usage_repository import SupabaseUsageRepository
from mealer.domain.catalog import CatalogEntry
from mealer.domain.inventory import UnitBrief
from mealer.domain.usage import DailyUsage


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: list[list[dict[str, object]]] = field(default_factory=list)
    last_columns: str | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    last_text_search: tuple[str, str, dict[str, str]] | None = None
    orders: list[tuple[str, bool]] = field(default_factory=list)
    last_limit: int | None = None

    def queue(self, data: list[dict[str, object]]) -> None:
        self.response_queue.append(data)

    def select(self, columns: str) -> "FakeTable":
        self.last_columns = columns
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def ilike(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def text_search(
        self, column: str, query: str, options: dict[str, str]
    ) -> "FakeTable":
        self.last_text_search = (column, query, options)
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.orders.append((column, desc))
        return self

    def limit(self, count: int) -> "FakeTable":
        self.last_limit = count
        return self

    def execute(self) -> FakeResponse:
        data = self.response_queue.pop(0) if self.response_queue else []
        return FakeResponse(data=data)


@dataclass
class FakeRpcCall:
    calls: list[tuple[str, dict[str, object]]]
    name: str
    params: dict[str, object]

    def execute(self) -> FakeResponse:
        self.calls.append((self.name, self.params))
        return FakeResponse(data=None)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)
    rpc_calls: list[tuple[str, dict[str, object]]] = field(default_factory=list)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]

    def rpc(self, name: str, params: dict[str, object]) -> FakeRpcCall:
        return FakeRpcCall(calls=self.rpc_calls, name=name, params=params)


def test_supabase_usage_repository_reads_daily_row() -> None:
    client = FakeSupabaseClient()
    usage_table = client.table("ai_usage_log")
    usage_table.queue([{"receipt_scan_count": 2, "substitution_count": None}])
    user_id = uuid4()

    repository = SupabaseUsageRepository(client)
    usage = repository.get_daily_usage(user_id, date(2026, 1, 20))

    assert usage == DailyUsage(receipt_scan_count=2, substitution_count=0)
    assert ("user_id", str(user_id)) in usage_table.last_filters
    assert ("usage_date", "2026-01-20") in usage_table.last_filters
    assert repository.get_daily_usage(user_id, date(2026, 1, 21)) is None


def test_supabase_usage_repository_increments_through_rpc() -> None:
    client = FakeSupabaseClient()
    user_id = uuid4()

    repository = SupabaseUsageRepository(client)
    repository.increment_usage(user_id, date(2026, 1, 20), "substitutions")
    repository.increment_usage(user_id, date(2026, 1, 20), "receipt_scans")

    assert client.rpc_calls == [
        (
            "increment_ai_usage",
            {
                "p_user_id": str(user_id),
                "p_usage_type": "substitution",
                "p_usage_date": "2026-01-20",
            },
        ),
        (
            "increment_ai_usage",
            {
                "p_user_id": str(user_id),
                "p_usage_type": "receipt_scan",
                "p_usage_date": "2026-01-20",
            },
        ),
    ]


def test_supabase_config_repository() -> None:
    client = FakeSupabaseClient()
    config_table = client.table("system_config")
    config_table.queue([{"value": {"receipt_scans_per_day": 3}}])

    repository = SupabaseConfigRepository(client)

    assert repository.get_value("rate_limits") == {"receipt_scans_per_day": 3}
    assert config_table.last_filters == [("key", "rate_limits")]
    assert repository.get_value("rate_limits") is None


def test_supabase_profile_repository_filters_json_arrays() -> None:
    client = FakeSupabaseClient()
    user_id = uuid4()
    client.table("profiles").queue(
        [
            {
                "id": str(user_id),
                "allergies": ["gluten", 3, None],
                "diets": None,
                "equipment": ["piekarnik"],
                "onboarding_status": None,
            }
        ]
    )

    repository = SupabaseProfileRepository(client)
    profile = repository.get_profile(user_id)

    assert profile is not None
    assert profile.user_id == user_id
    assert profile.allergies == ["gluten"]
    assert profile.diets == []
    assert profile.equipment == ["piekarnik"]
    assert not profile.onboarding_completed
    assert repository.get_profile(uuid4()) is None


def test_supabase_inventory_repository_parses_joined_rows() -> None:
    client = FakeSupabaseClient()
    inventory_table = client.table("inventory_items")
    inventory_table.queue(
        [
            {
                "id": "a1b2",
                "custom_name": None,
                "quantity": "1.5",
                "is_staple": True,
                "is_available": True,
                "product": {"id": 7, "name_pl": "Mleko"},
                "unit": {"id": 3, "name_pl": "litr", "abbreviation": "l"},
            },
            {
                "id": "c3d4",
                "custom_name": "Przyprawa domowa",
                "quantity": None,
                "is_staple": False,
                "is_available": True,
                "product": None,
                "unit": None,
            },
        ]
    )
    user_id = uuid4()

    repository = SupabaseInventoryRepository(client)
    records = repository.list_available_items(user_id, limit=50)

    assert records[0].quantity == 1.5
    assert records[0].product is not None
    assert records[0].product.name_pl == "Mleko"
    assert records[0].unit == UnitBrief(id=3, name_pl="litr", abbreviation="l")
    assert records[1].product is None
    assert records[1].custom_name == "Przyprawa domowa"
    assert ("is_available", True) in inventory_table.last_filters
    assert inventory_table.orders == [("created_at", True)]
    assert inventory_table.last_limit == 50


def test_supabase_catalog_repository_searches() -> None:
    client = FakeSupabaseClient()
    catalog_table = client.table("product_catalog")
    catalog_table.queue([{"id": 7, "name_pl": "Mleko"}])
    catalog_table.queue([{"id": 8, "name_pl": "Mleko 50% taniej"}])

    repository = SupabaseCatalogRepository(client)
    full_text = repository.search_full_text("mleko", limit=1)
    contains = repository.search_contains("50%", limit=1)

    assert full_text == [CatalogEntry(id=7, name_pl="Mleko")]
    assert catalog_table.last_text_search == (
        "search_vector",
        "mleko",
        {"type": "websearch", "config": "simple"},
    )
    assert contains == [CatalogEntry(id=8, name_pl="Mleko 50% taniej")]
    assert ("name_pl", "%50\\%%") in catalog_table.last_filters


def test_supabase_catalog_repository_units() -> None:
    client = FakeSupabaseClient()
    client.table("product_catalog").queue(
        [{"id": 7, "default_unit": {"id": 3, "name_pl": "litr", "abbreviation": "l"}}]
    )
    client.table("product_catalog").queue([{"id": 9, "default_unit": None}])
    units_table = client.table("units")
    units_table.queue([{"id": 1, "name_pl": "gram", "abbreviation": "g"}])

    repository = SupabaseCatalogRepository(client)

    assert repository.get_default_unit(7) == UnitBrief(
        id=3, name_pl="litr", abbreviation="l"
    )
    assert repository.get_default_unit(9) is None
    assert repository.list_units() == [UnitBrief(id=1, name_pl="gram", abbreviation="g")]
    assert units_table.orders == [("unit_type", False), ("name_pl", False)]


def test_escape_ilike() -> None:
    assert escape_ilike("a_b%c\\d") == "a\\_b\\%c\\\\d"


def test_supabase_auth_client() -> None:
    user_id = uuid4()

    def get_user(token: str) -> SimpleNamespace:
        if token != "good":
            raise ValueError("invalid JWT")
        return SimpleNamespace(user=SimpleNamespace(id=str(user_id)))

    client = SimpleNamespace(auth=SimpleNamespace(get_user=get_user))
    auth_client = SupabaseAuthClient(client)

    assert auth_client.get_user_id("good") == user_id
    assert auth_client.get_user_id("bad") is None
