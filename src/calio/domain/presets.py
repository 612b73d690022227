"""Domain models for reusable food presets."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

DEFAULT_PRESET_WEIGHT_G = 100.0


@dataclass(frozen=True)
class Preset:
    """A named template for quickly logging a food."""

    id: UUID
    user_id: UUID
    name: str
    calories: int
    protein_g: float
    carbs_g: float
    fat_g: float
    default_weight_g: float
    use_count: int
    last_used_at: datetime | None
    position: int = 0


class PresetDraft(BaseModel):
    """User-supplied preset values."""

    name: str = Field(min_length=1)
    calories: int = Field(ge=0)
    protein_g: float = Field(default=0.0, ge=0)
    carbs_g: float = Field(default=0.0, ge=0)
    fat_g: float = Field(default=0.0, ge=0)
    default_weight_g: float = Field(default=DEFAULT_PRESET_WEIGHT_G, ge=0)
