"""User profile models."""

from dataclasses import dataclass, field
from uuid import UUID


@dataclass(frozen=True)
class ProfileRecord:
    """Dietary preferences declared by a user."""

    user_id: UUID
    allergies: list[str] = field(default_factory=list)
    diets: list[str] = field(default_factory=list)
    equipment: list[str] = field(default_factory=list)
    onboarding_status: str = "pending"

    @property
    def onboarding_completed(self) -> bool:
        """Return True once onboarding has been finished."""
        return self.onboarding_status == "completed"
