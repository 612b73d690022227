"""Goal storage and progress evaluation."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from calio.domain.goals import GoalDraft, GoalProgress, MacroProgress, NutritionGoal
from calio.domain.stats import DailyTotals

DEFAULT_CALORIE_GOAL = 2000


class GoalRepository(Protocol):
    """Persistence interface for nutrition goals."""

    def get_latest_goal(self, user_id: UUID) -> NutritionGoal | None:
        """Return the most recently created goal, if any."""

    def create_goal(
        self, user_id: UUID, draft: GoalDraft, created_at: datetime
    ) -> NutritionGoal:
        """Create a goal and return it."""

    def update_goal(
        self, goal_id: UUID, draft: GoalDraft, updated_at: datetime
    ) -> NutritionGoal:
        """Update a goal's targets and return it."""


def progress(total: float, goal: float | None) -> float | None:
    """Return total / goal, or None when the goal is missing or not positive."""
    if goal is None or goal <= 0:
        return None
    return total / goal


def remaining(total: float, goal: float) -> float:
    """Return how much is left before reaching the goal, never negative."""
    return max(0, goal - total)


def overage(total: float, goal: float) -> float:
    """Return how far the total exceeds the goal, never negative."""
    return max(0, total - goal)


def _macro_progress(total: float, goal: float | None) -> MacroProgress:
    return MacroProgress(
        total_g=total,
        goal_g=goal,
        progress=progress(total, goal),
        remaining_g=remaining(total, goal) if goal is not None else None,
    )


@dataclass
class GoalService:
    """Service for reading, saving and evaluating goals."""

    repository: GoalRepository
    default_calorie_goal: int = DEFAULT_CALORIE_GOAL

    def get_current_goal(self, user_id: UUID) -> NutritionGoal | None:
        """Return the user's current goal."""
        return self.repository.get_latest_goal(user_id)

    def save_goal(self, user_id: UUID, draft: GoalDraft) -> NutritionGoal:
        """Update the current goal in place, or create the first one."""
        now = datetime.now(tz=UTC)
        current = self.repository.get_latest_goal(user_id)
        if current is None:
            return self.repository.create_goal(user_id, draft, created_at=now)
        return self.repository.update_goal(current.id, draft, updated_at=now)

    def evaluate(
        self, totals: DailyTotals, goal: NutritionGoal | None
    ) -> GoalProgress:
        """Compare a day's totals against a goal."""
        calories_goal = (
            goal.daily_calories if goal is not None else self.default_calorie_goal
        )
        return GoalProgress(
            calories_used=totals.calories,
            calories_goal=calories_goal,
            calories_progress=progress(totals.calories, calories_goal),
            calories_remaining=int(remaining(totals.calories, calories_goal)),
            calories_overage=int(overage(totals.calories, calories_goal)),
            protein=_macro_progress(
                totals.protein_g, goal.protein_g if goal else None
            ),
            carbs=_macro_progress(totals.carbs_g, goal.carbs_g if goal else None),
            fat=_macro_progress(totals.fat_g, goal.fat_g if goal else None),
        )
