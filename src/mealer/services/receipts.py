"""Resolve extracted receipt lines against the catalog."""

from dataclasses import dataclass
from uuid import UUID

from mealer.domain.catalog import ReceiptScanItem
from mealer.domain.receipts import ExtractedReceiptItem
from mealer.domain.usage import RateLimitCheck
from mealer.services.catalog import CatalogService
from mealer.services.usage import DailyLimitExceededError, UsageLedger


@dataclass(frozen=True)
class ReceiptScanResult:
    """Resolved receipt items plus post-scan usage."""

    items: list[ReceiptScanItem]
    usage: RateLimitCheck


@dataclass
class ReceiptScanService:
    """Turns receipt extraction output into catalog-linked pantry candidates."""

    usage_ledger: UsageLedger
    catalog_service: CatalogService

    def process(
        self, user_id: UUID, extracted: list[ExtractedReceiptItem]
    ) -> ReceiptScanResult:
        """Check quota, match each line to a product and unit, then count the scan."""
        check = self.usage_ledger.check_limit(user_id, "receipt_scans")
        if not check.allowed:
            raise DailyLimitExceededError("receipt_scans", check)

        items = [self._resolve(item) for item in extracted]

        self.usage_ledger.record_usage(user_id, "receipt_scans")
        return ReceiptScanResult(
            items=items,
            usage=self.usage_ledger.check_limit(user_id, "receipt_scans"),
        )

    def _resolve(self, item: ExtractedReceiptItem) -> ReceiptScanItem:
        product = self.catalog_service.match_product(item.name)
        unit = self.catalog_service.suggest_unit(
            product.id if product else None, item.unit
        )
        return ReceiptScanItem(
            name=item.name,
            matched_product=product,
            quantity=item.quantity,
            suggested_unit=unit,
            confidence=item.confidence,
        )
