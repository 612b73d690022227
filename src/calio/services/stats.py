"""Statistics service for daily logs."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from uuid import UUID

from calio.domain.goals import NutritionGoal
from calio.domain.stats import DailyTotals, WeeklyStats
from calio.services.food_log import DailyLogRepository, today_in
from calio.services.nutrition import aggregate_entries

WEEK_DAYS = 7


def _empty_day(day: date) -> DailyTotals:
    return DailyTotals(day=day, calories=0, protein_g=0.0, carbs_g=0.0, fat_g=0.0)


def on_target_band(daily_calories: int) -> tuple[int, int]:
    """Return the inclusive [lower, upper] calorie band around a goal.

    Both bounds are rounded toward the goal: ceil(0.9 * goal) and
    floor(1.1 * goal), in integer arithmetic.
    """
    lower = -(-daily_calories * 9 // 10)
    upper = daily_calories * 11 // 10
    return lower, upper


def count_on_target(days: Sequence[DailyTotals], goal: NutritionGoal | None) -> int:
    """Count days whose calories fall inside the goal's band."""
    if goal is None or goal.daily_calories <= 0:
        return 0
    lower, upper = on_target_band(goal.daily_calories)
    return sum(1 for day in days if lower <= day.calories <= upper)


def current_streak(days: Sequence[DailyTotals], as_of: date) -> int:
    """Count consecutive days with logged calories, walking back from as_of."""
    calories_by_day = {day.day: day.calories for day in days}
    streak = 0
    check = as_of
    while calories_by_day.get(check, 0) > 0:
        streak += 1
        check -= timedelta(days=1)
    return streak


def fill_window(start: date, days: Sequence[DailyTotals]) -> list[DailyTotals]:
    """Return one DailyTotals per day of the week starting at start."""
    by_day = {day.day: day for day in days}
    window = []
    for offset in range(WEEK_DAYS):
        day = start + timedelta(days=offset)
        window.append(by_day.get(day) or _empty_day(day))
    return window


def weekly_stats(
    days: Sequence[DailyTotals],
    goal: NutritionGoal | None,
    as_of: date | None = None,
    end: date | None = None,
) -> WeeklyStats:
    """Compute average, on-target days and streak for seven consecutive days.

    The window ends at end, defaulting to the latest supplied day (or as_of,
    then today, when no days are supplied) and covers the six days before it.
    Days without totals count as zero. The streak is anchored at as_of,
    defaulting to the window's last day.
    """
    if end is None:
        if days:
            end = max(day.day for day in days)
        else:
            end = as_of or date.today()
    start = end - timedelta(days=WEEK_DAYS - 1)
    window = fill_window(start, days)
    total = sum(day.calories for day in window)
    return WeeklyStats(
        start=start,
        end=end,
        daily=window,
        average=total // WEEK_DAYS,
        on_target_days=count_on_target(window, goal),
        streak=current_streak(window, as_of or end),
    )


@dataclass
class StatsService:
    """Service for computing user stats by timezone."""

    repository: DailyLogRepository

    def get_today(self, user_id: UUID, timezone_name: str) -> DailyTotals:
        """Return today's totals in the user's timezone."""
        today = today_in(timezone_name)
        log = self.repository.get_daily_log(user_id, today)
        if log is None:
            return _empty_day(today)
        return aggregate_entries(today, log.entries)

    def get_week(
        self,
        user_id: UUID,
        timezone_name: str,
        goal: NutritionGoal | None,
        week_offset: int = 0,
    ) -> WeeklyStats:
        """Return stats for a Monday-start week, shifted by week_offset weeks."""
        today = today_in(timezone_name)
        start = today - timedelta(days=today.weekday()) + timedelta(weeks=week_offset)
        end = start + timedelta(days=WEEK_DAYS - 1)
        logs = self.repository.list_daily_logs(user_id, start, end)
        daily = fill_window(
            start, [aggregate_entries(log.day, log.entries) for log in logs]
        )
        return weekly_stats(daily, goal, as_of=min(today, end), end=end)
