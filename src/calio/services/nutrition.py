"""Pure nutrition math: scaling, calorie estimates and daily sums."""

import math
from collections.abc import Iterable
from datetime import date

from calio.domain.entries import FoodEntry
from calio.domain.stats import DailyTotals

PROTEIN_KCAL_PER_G = 4
CARBS_KCAL_PER_G = 4
FAT_KCAL_PER_G = 9


def scale_value(base_value: float, base_weight: float, target_weight: float) -> float:
    """Scale a value linearly from base_weight to target_weight.

    A non-positive base weight has no scaling basis, so the value is returned
    unchanged.
    """
    if base_weight <= 0:
        return base_value
    return base_value * (target_weight / base_weight)


def scale_calories(calories: int, base_weight: float, target_weight: float) -> int:
    """Scale calories and round to the nearest integer, halves rounding up."""
    return math.floor(scale_value(calories, base_weight, target_weight) + 0.5)


def estimate_calories(protein_g: float, carbs_g: float, fat_g: float) -> int:
    """Estimate calories from macros using 4/4/9 kcal per gram."""
    return math.floor(
        protein_g * PROTEIN_KCAL_PER_G
        + carbs_g * CARBS_KCAL_PER_G
        + fat_g * FAT_KCAL_PER_G
    )


def suggest_calories(protein_g: float, carbs_g: float, fat_g: float) -> int | None:
    """Return a calorie suggestion for edited macros, or None if there is none."""
    estimate = estimate_calories(protein_g, carbs_g, fat_g)
    if estimate > 0:
        return estimate
    return None


def aggregate_entries(day: date, entries: Iterable[FoodEntry]) -> DailyTotals:
    """Sum calories and macros across entries."""
    calories = 0
    protein_g = 0.0
    carbs_g = 0.0
    fat_g = 0.0
    for entry in entries:
        calories += entry.calories
        protein_g += entry.protein_g
        carbs_g += entry.carbs_g
        fat_g += entry.fat_g
    return DailyTotals(
        day=day,
        calories=calories,
        protein_g=protein_g,
        carbs_g=carbs_g,
        fat_g=fat_g,
    )
