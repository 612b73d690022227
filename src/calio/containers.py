"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from calio.adapters.supabase_daily_log_repository import SupabaseDailyLogRepository
from calio.adapters.supabase_goal_repository import SupabaseGoalRepository
from calio.adapters.supabase_preset_repository import SupabasePresetRepository
from calio.adapters.supabase_user_settings_repository import (
    SupabaseUserSettingsRepository,
)
from calio.app_logging import configure_logging
from calio.config import Settings
from calio.services.food_log import FoodLogService
from calio.services.goals import GoalService
from calio.services.presets import PresetService
from calio.services.stats import StatsService
from calio.services.user_settings import UserSettingsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    goal_service: GoalService
    preset_service: PresetService
    food_log_service: FoodLogService
    stats_service: StatsService
    user_settings_service: UserSettingsService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    configure_logging()
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    daily_log_repository = SupabaseDailyLogRepository(supabase_client)
    goal_service = GoalService(
        SupabaseGoalRepository(supabase_client),
        default_calorie_goal=resolved_settings.default_calorie_goal,
    )
    preset_service = PresetService(
        SupabasePresetRepository(supabase_client),
        recent_limit=resolved_settings.recent_presets_limit,
    )
    food_log_service = FoodLogService(
        repository=daily_log_repository,
        preset_service=preset_service,
    )
    stats_service = StatsService(daily_log_repository)
    user_settings_service = UserSettingsService(
        repository=SupabaseUserSettingsRepository(supabase_client),
        goal_service=goal_service,
    )

    return AppContainer(
        settings=resolved_settings,
        goal_service=goal_service,
        preset_service=preset_service,
        food_log_service=food_log_service,
        stats_service=stats_service,
        user_settings_service=user_settings_service,
    )
