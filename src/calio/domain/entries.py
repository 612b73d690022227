"""Domain models for logged food."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field

QUICK_ADD_NAME = "Quick Add"


class FoodEntryDraft(BaseModel):
    """A food entry that has not been attached to a day yet."""

    name: str = Field(min_length=1)
    calories: int = Field(ge=0)
    protein_g: float = Field(default=0.0, ge=0)
    carbs_g: float = Field(default=0.0, ge=0)
    fat_g: float = Field(default=0.0, ge=0)
    weight_g: float = Field(default=0.0, ge=0)
    is_quick_add: bool = False


@dataclass(frozen=True)
class FoodEntry:
    """A logged food item. A weight of 0 means it has no weight basis."""

    id: UUID
    daily_log_id: UUID
    name: str
    calories: int
    protein_g: float
    carbs_g: float
    fat_g: float
    weight_g: float
    logged_at: datetime
    is_quick_add: bool = False


@dataclass(frozen=True)
class DailyLog:
    """All entries logged on one calendar day."""

    id: UUID
    user_id: UUID
    day: date
    entries: list[FoodEntry] = field(default_factory=list)
