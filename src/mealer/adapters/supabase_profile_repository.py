"""Supabase repository for user profiles."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from mealer.domain.profiles import ProfileRecord
from mealer.services.profiles import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile reads."""

    client: Client

    def get_profile(self, user_id: UUID) -> ProfileRecord | None:
        """Return the profile row for a user, if present."""
        response = (
            self.client.table("profiles")
            .select("id, allergies, diets, equipment, onboarding_status")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return ProfileRecord(
            user_id=UUID(row["id"]),
            allergies=_string_list(row.get("allergies")),
            diets=_string_list(row.get("diets")),
            equipment=_string_list(row.get("equipment")),
            onboarding_status=str(row.get("onboarding_status") or "pending"),
        )


def _string_list(value: object) -> list[str]:
    """Keep only string entries of a JSONB array."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]
