"""Supabase repository for system configuration."""

from dataclasses import dataclass

from supabase import Client

from mealer.services.usage import ConfigRepository


@dataclass
class SupabaseConfigRepository(ConfigRepository):
    """Reads JSON values from the system_config table."""

    client: Client

    def get_value(self, key: str) -> object | None:
        """Return the stored value for a key, if present."""
        response = (
            self.client.table("system_config")
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("value")
