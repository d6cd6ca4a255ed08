"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from mealer.adapters.openai_substitution_suggester import OpenAISubstitutionSuggester
from mealer.adapters.supabase_auth_client import SupabaseAuthClient
from mealer.adapters.supabase_catalog_repository import SupabaseCatalogRepository
from mealer.adapters.supabase_config_repository import SupabaseConfigRepository
from mealer.adapters.supabase_inventory_repository import (
    SupabaseInventoryRepository,
)
from mealer.adapters.supabase_profile_repository import SupabaseProfileRepository
from mealer.adapters.supabase_usage_repository import SupabaseUsageRepository
from mealer.config import Settings
from mealer.services.analysis import SubstitutionService
from mealer.services.auth import AuthService
from mealer.services.catalog import CatalogService
from mealer.services.inventory import InventoryService
from mealer.services.profiles import ProfileService
from mealer.services.receipts import ReceiptScanService
from mealer.services.recipe_warnings import WarningGenerator
from mealer.services.resolver import IngredientResolver
from mealer.services.similarity import LevenshteinMatcher
from mealer.services.substitutions import (
    StaticSubstitutionSuggester,
    SubstitutionSuggester,
)
from mealer.services.usage import UsageLedger


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    profile_service: ProfileService
    usage_ledger: UsageLedger
    substitution_service: SubstitutionService
    receipt_scan_service: ReceiptScanService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    usage_ledger = UsageLedger(
        repository=SupabaseUsageRepository(supabase_client),
        config_repository=SupabaseConfigRepository(supabase_client),
    )
    inventory_service = InventoryService(
        repository=SupabaseInventoryRepository(supabase_client),
        snapshot_limit=resolved_settings.inventory_snapshot_limit,
    )
    resolver = IngredientResolver(
        matcher=LevenshteinMatcher(threshold=resolved_settings.similarity_threshold),
        suggester=build_suggester(resolved_settings),
    )
    substitution_service = SubstitutionService(
        usage_ledger=usage_ledger,
        inventory_service=inventory_service,
        resolver=resolver,
        warning_generator=WarningGenerator(),
    )
    receipt_scan_service = ReceiptScanService(
        usage_ledger=usage_ledger,
        catalog_service=CatalogService(SupabaseCatalogRepository(supabase_client)),
    )

    return AppContainer(
        settings=resolved_settings,
        auth_service=AuthService(SupabaseAuthClient(supabase_client)),
        profile_service=ProfileService(SupabaseProfileRepository(supabase_client)),
        usage_ledger=usage_ledger,
        substitution_service=substitution_service,
        receipt_scan_service=receipt_scan_service,
    )


def build_suggester(settings: Settings) -> SubstitutionSuggester:
    """Return the substitution suggester selected in settings."""
    if settings.substitution_backend == "openai":
        if not settings.openai_api_key:
            raise ValueError("OPENAI_API_KEY is required for the openai backend")
        return OpenAISubstitutionSuggester.create(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            store=settings.openai_store,
            timeout=settings.openai_timeout_seconds,
        )
    return StaticSubstitutionSuggester()
