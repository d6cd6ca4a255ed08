"""Supabase Auth token verification."""

import logging
from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from mealer.services.auth import AuthClient

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseAuthClient(AuthClient):
    """Resolves access tokens with Supabase Auth."""

    client: Client

    def get_user_id(self, access_token: str) -> UUID | None:
        """Return the user id behind a token, or None when it is rejected."""
        try:
            response = self.client.auth.get_user(access_token)
        except Exception:
            _logger.info("Access token rejected by Supabase Auth")
            return None
        user = getattr(response, "user", None)
        if user is None:
            return None
        return UUID(str(user.id))
