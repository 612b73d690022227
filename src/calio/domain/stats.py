"""Domain models for statistics."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class DailyTotals:
    """Daily total calories and macros."""

    day: date
    calories: int
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class WeeklyStats:
    """Statistics for a seven day window."""

    start: date
    end: date
    daily: list[DailyTotals]
    average: int
    on_target_days: int
    streak: int
