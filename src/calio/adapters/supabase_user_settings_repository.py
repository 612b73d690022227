"""Supabase repository for user settings."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from calio.services.user_settings import UserSettingsRepository


@dataclass
class SupabaseUserSettingsRepository(UserSettingsRepository):
    """Supabase implementation for user settings."""

    client: Client

    def get_timezone(self, user_id: UUID) -> str | None:
        """Return the stored timezone for a user."""
        row = self._get_row(user_id, "timezone")
        if row is None:
            return None
        return row.get("timezone")

    def set_timezone(self, user_id: UUID, timezone: str) -> None:
        """Update the user's timezone."""
        self._upsert(user_id, {"timezone": timezone})

    def get_onboarding_complete(self, user_id: UUID) -> bool:
        """Return the stored onboarding flag."""
        row = self._get_row(user_id, "onboarding_complete")
        if row is None:
            return False
        return bool(row.get("onboarding_complete", False))

    def set_onboarding_complete(self, user_id: UUID, complete: bool) -> None:
        """Update the onboarding flag."""
        self._upsert(user_id, {"onboarding_complete": complete})

    def _get_row(self, user_id: UUID, columns: str) -> dict[str, object] | None:
        response = (
            self.client.table("user_settings")
            .select(columns)
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0]

    def _upsert(self, user_id: UUID, values: dict[str, object]) -> None:
        self.client.table("user_settings").upsert(
            {
                "user_id": str(user_id),
                **values,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id",
        ).execute()
