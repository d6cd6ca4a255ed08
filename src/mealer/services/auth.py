"""Access token verification."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID


class AuthClient(Protocol):
    """Interface for resolving access tokens to users."""

    def get_user_id(self, access_token: str) -> UUID | None:
        """Return the user id for a valid token, otherwise None."""


@dataclass
class AuthService:
    """Resolves bearer tokens to authenticated user ids."""

    client: AuthClient

    def authenticate(self, authorization: str | None) -> UUID | None:
        """Return the user id for an `Authorization: Bearer` header value."""
        if not authorization:
            return None
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            return None
        return self.client.get_user_id(token.strip())
