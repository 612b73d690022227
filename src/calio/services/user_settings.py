"""User settings service."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from calio.domain.goals import GoalDraft, NutritionGoal
from calio.services.goals import GoalService


class UserSettingsRepository(Protocol):
    """Persistence interface for user settings."""

    def get_timezone(self, user_id: UUID) -> str | None:
        """Return the user's timezone if set."""

    def set_timezone(self, user_id: UUID, timezone: str) -> None:
        """Update the user's timezone."""

    def get_onboarding_complete(self, user_id: UUID) -> bool:
        """Return whether the user finished onboarding."""

    def set_onboarding_complete(self, user_id: UUID, complete: bool) -> None:
        """Update the onboarding flag."""


@dataclass
class UserSettingsService:
    """Service for per-user application state."""

    repository: UserSettingsRepository
    goal_service: GoalService

    def get_timezone(self, user_id: UUID) -> str:
        """Return the user timezone or UTC if unset."""
        return self.repository.get_timezone(user_id) or "UTC"

    def set_timezone(self, user_id: UUID, timezone: str) -> None:
        """Persist a user's timezone."""
        self.repository.set_timezone(user_id, timezone)

    def is_timezone_set(self, user_id: UUID) -> bool:
        """Return True when the user's timezone is configured."""
        return self.repository.get_timezone(user_id) is not None

    def is_onboarding_complete(self, user_id: UUID) -> bool:
        """Return True once the user has set up a first goal."""
        return self.repository.get_onboarding_complete(user_id)

    def complete_onboarding(self, user_id: UUID, draft: GoalDraft) -> NutritionGoal:
        """Save the initial goal and mark onboarding as done."""
        goal = self.goal_service.save_goal(user_id, draft)
        self.repository.set_onboarding_complete(user_id, True)
        return goal
