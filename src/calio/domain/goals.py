"""Domain models for nutrition goals."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class NutritionGoal:
    """Daily nutrition targets. Macro targets of None are not tracked."""

    id: UUID
    user_id: UUID
    daily_calories: int
    protein_g: float | None
    carbs_g: float | None
    fat_g: float | None
    created_at: datetime
    updated_at: datetime

    @property
    def has_macros(self) -> bool:
        """Return True when any macro target is tracked."""
        return any(
            value is not None for value in (self.protein_g, self.carbs_g, self.fat_g)
        )


class GoalDraft(BaseModel):
    """User-supplied goal values."""

    daily_calories: int = Field(ge=0)
    protein_g: float | None = Field(default=None, ge=0)
    carbs_g: float | None = Field(default=None, ge=0)
    fat_g: float | None = Field(default=None, ge=0)


@dataclass(frozen=True)
class MacroProgress:
    """Progress for one macro; all None when the macro is not tracked."""

    total_g: float
    goal_g: float | None
    progress: float | None
    remaining_g: float | None


@dataclass(frozen=True)
class GoalProgress:
    """A day's totals compared against a goal."""

    calories_used: int
    calories_goal: int
    calories_progress: float | None
    calories_remaining: int
    calories_overage: int
    protein: MacroProgress
    carbs: MacroProgress
    fat: MacroProgress

    @property
    def is_over_goal(self) -> bool:
        """Return True when calories exceed the goal."""
        return self.calories_used > self.calories_goal
