"""Supabase repository for daily AI usage counters."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from mealer.domain.usage import DailyUsage, UsageKind
from mealer.services.usage import UsageRepository

# Usage kind -> p_usage_type accepted by increment_ai_usage().
_RPC_USAGE_TYPES: dict[UsageKind, str] = {
    "receipt_scans": "receipt_scan",
    "substitutions": "substitution",
}


@dataclass
class SupabaseUsageRepository(UsageRepository):
    """Supabase implementation backed by ai_usage_log and an upsert function."""

    client: Client

    def get_daily_usage(self, user_id: UUID, day: date) -> DailyUsage | None:
        """Return the usage row for the day, if present."""
        response = (
            self.client.table("ai_usage_log")
            .select("receipt_scan_count, substitution_count")
            .eq("user_id", str(user_id))
            .eq("usage_date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return DailyUsage(
            receipt_scan_count=int(row.get("receipt_scan_count") or 0),
            substitution_count=int(row.get("substitution_count") or 0),
        )

    def increment_usage(self, user_id: UUID, day: date, kind: UsageKind) -> None:
        """Increment the counter in one statement on the database side."""
        self.client.rpc(
            "increment_ai_usage",
            {
                "p_user_id": str(user_id),
                "p_usage_type": _RPC_USAGE_TYPES[kind],
                "p_usage_date": day.isoformat(),
            },
        ).execute()
