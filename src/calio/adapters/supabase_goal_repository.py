"""Supabase repository for nutrition goals."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from calio.domain.goals import GoalDraft, NutritionGoal
from calio.services.goals import GoalRepository


@dataclass
class SupabaseGoalRepository(GoalRepository):
    """Supabase implementation for goals."""

    client: Client

    def get_latest_goal(self, user_id: UUID) -> NutritionGoal | None:
        """Return the most recently created goal."""
        response = (
            self.client.table("nutrition_goals")
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_goal(response.data[0])

    def create_goal(
        self, user_id: UUID, draft: GoalDraft, created_at: datetime
    ) -> NutritionGoal:
        """Create a goal and return it."""
        response = (
            self.client.table("nutrition_goals")
            .insert(
                {
                    "user_id": str(user_id),
                    **draft.model_dump(),
                    "created_at": created_at.isoformat(),
                    "updated_at": created_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create goal")
        return _parse_goal(response.data[0])

    def update_goal(
        self, goal_id: UUID, draft: GoalDraft, updated_at: datetime
    ) -> NutritionGoal:
        """Replace a goal's targets."""
        response = (
            self.client.table("nutrition_goals")
            .update({**draft.model_dump(), "updated_at": updated_at.isoformat()})
            .eq("id", str(goal_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update goal")
        return _parse_goal(response.data[0])


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)


def _parse_datetime(value: object) -> datetime:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return datetime.min.replace(tzinfo=UTC)


def _parse_goal(row: dict[str, object]) -> NutritionGoal:
    """Parse a goal row into a domain model."""
    return NutritionGoal(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        daily_calories=int(row.get("daily_calories", 0)),
        protein_g=_optional_float(row.get("protein_g")),
        carbs_g=_optional_float(row.get("carbs_g")),
        fat_g=_optional_float(row.get("fat_g")),
        created_at=_parse_datetime(row.get("created_at")),
        updated_at=_parse_datetime(row.get("updated_at")),
    )
