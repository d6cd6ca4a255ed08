"""User profile lookups."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from mealer.domain.profiles import ProfileRecord


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: UUID) -> ProfileRecord | None:
        """Return the profile for a user, if present."""


@dataclass
class ProfileService:
    """Application service for profile access."""

    repository: ProfileRepository

    def get_profile(self, user_id: UUID) -> ProfileRecord | None:
        """Return the user's profile, if present."""
        return self.repository.get_profile(user_id)
