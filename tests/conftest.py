"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

import pytest

from calio.config import Settings
from calio.containers import AppContainer
from calio.domain.entries import DailyLog, FoodEntry, FoodEntryDraft
from calio.domain.goals import GoalDraft, NutritionGoal
from calio.domain.presets import Preset, PresetDraft
from calio.services.food_log import DailyLogRepository, FoodLogService
from calio.services.goals import GoalRepository, GoalService
from calio.services.presets import PresetRepository, PresetService
from calio.services.stats import StatsService
from calio.services.user_settings import (
    UserSettingsRepository,
    UserSettingsService,
)


@dataclass
class InMemoryGoalRepository(GoalRepository):
    """In-memory goal repository for tests."""

    goals: dict[UUID, NutritionGoal] = field(default_factory=dict)

    def get_latest_goal(self, user_id: UUID) -> NutritionGoal | None:
        owned = [goal for goal in self.goals.values() if goal.user_id == user_id]
        if not owned:
            return None
        return max(owned, key=lambda goal: goal.created_at)

    def create_goal(
        self, user_id: UUID, draft: GoalDraft, created_at: datetime
    ) -> NutritionGoal:
        goal = NutritionGoal(
            id=uuid4(),
            user_id=user_id,
            daily_calories=draft.daily_calories,
            protein_g=draft.protein_g,
            carbs_g=draft.carbs_g,
            fat_g=draft.fat_g,
            created_at=created_at,
            updated_at=created_at,
        )
        self.goals[goal.id] = goal
        return goal

    def update_goal(
        self, goal_id: UUID, draft: GoalDraft, updated_at: datetime
    ) -> NutritionGoal:
        current = self.goals[goal_id]
        updated = NutritionGoal(
            id=current.id,
            user_id=current.user_id,
            daily_calories=draft.daily_calories,
            protein_g=draft.protein_g,
            carbs_g=draft.carbs_g,
            fat_g=draft.fat_g,
            created_at=current.created_at,
            updated_at=updated_at,
        )
        self.goals[goal_id] = updated
        return updated


@dataclass
class InMemoryPresetRepository(PresetRepository):
    """In-memory preset repository for tests."""

    presets: dict[UUID, Preset] = field(default_factory=dict)
    fail_usage: bool = False

    def create_preset(self, user_id: UUID, draft: PresetDraft) -> Preset:
        preset = Preset(
            id=uuid4(),
            user_id=user_id,
            name=draft.name,
            calories=draft.calories,
            protein_g=draft.protein_g,
            carbs_g=draft.carbs_g,
            fat_g=draft.fat_g,
            default_weight_g=draft.default_weight_g,
            use_count=0,
            last_used_at=None,
        )
        self.presets[preset.id] = preset
        return preset

    def update_preset(self, preset_id: UUID, draft: PresetDraft) -> Preset:
        current = self.presets[preset_id]
        updated = Preset(
            id=current.id,
            user_id=current.user_id,
            name=draft.name,
            calories=draft.calories,
            protein_g=draft.protein_g,
            carbs_g=draft.carbs_g,
            fat_g=draft.fat_g,
            default_weight_g=draft.default_weight_g,
            use_count=current.use_count,
            last_used_at=current.last_used_at,
            position=current.position,
        )
        self.presets[preset_id] = updated
        return updated

    def get_preset(self, preset_id: UUID) -> Preset | None:
        return self.presets.get(preset_id)

    def list_presets(self, user_id: UUID) -> list[Preset]:
        return [preset for preset in self.presets.values() if preset.user_id == user_id]

    def delete_preset(self, preset_id: UUID) -> None:
        self.presets.pop(preset_id, None)

    def set_position(self, preset_id: UUID, position: int) -> None:
        current = self.presets[preset_id]
        self.presets[preset_id] = _replace_preset(current, position=position)

    def increment_usage(self, preset_id: UUID, used_at: datetime) -> None:
        if self.fail_usage:
            raise RuntimeError("usage update failed")
        current = self.presets[preset_id]
        self.presets[preset_id] = _replace_preset(
            current, use_count=current.use_count + 1, last_used_at=used_at
        )


def _replace_preset(current: Preset, **changes: object) -> Preset:
    values = {
        "id": current.id,
        "user_id": current.user_id,
        "name": current.name,
        "calories": current.calories,
        "protein_g": current.protein_g,
        "carbs_g": current.carbs_g,
        "fat_g": current.fat_g,
        "default_weight_g": current.default_weight_g,
        "use_count": current.use_count,
        "last_used_at": current.last_used_at,
        "position": current.position,
    }
    values.update(changes)
    return Preset(**values)


@dataclass
class InMemoryDailyLogRepository(DailyLogRepository):
    """In-memory daily log repository for tests."""

    logs: dict[UUID, DailyLog] = field(default_factory=dict)
    entries: dict[UUID, FoodEntry] = field(default_factory=dict)

    def get_daily_log(self, user_id: UUID, day: date) -> DailyLog | None:
        for log in self.logs.values():
            if log.user_id == user_id and log.day == day:
                return self._with_entries(log)
        return None

    def create_daily_log(self, user_id: UUID, day: date) -> DailyLog:
        log = DailyLog(id=uuid4(), user_id=user_id, day=day)
        self.logs[log.id] = log
        return log

    def list_daily_logs(self, user_id: UUID, start: date, end: date) -> list[DailyLog]:
        return [
            self._with_entries(log)
            for log in self.logs.values()
            if log.user_id == user_id and start <= log.day <= end
        ]

    def create_entry(
        self, daily_log_id: UUID, draft: FoodEntryDraft, logged_at: datetime
    ) -> FoodEntry:
        entry = FoodEntry(
            id=uuid4(),
            daily_log_id=daily_log_id,
            name=draft.name,
            calories=draft.calories,
            protein_g=draft.protein_g,
            carbs_g=draft.carbs_g,
            fat_g=draft.fat_g,
            weight_g=draft.weight_g,
            logged_at=logged_at,
            is_quick_add=draft.is_quick_add,
        )
        self.entries[entry.id] = entry
        return entry

    def delete_entry(self, entry_id: UUID) -> None:
        self.entries.pop(entry_id, None)

    def delete_daily_log(self, daily_log_id: UUID) -> None:
        for entry_id in [
            entry.id
            for entry in self.entries.values()
            if entry.daily_log_id == daily_log_id
        ]:
            del self.entries[entry_id]
        self.logs.pop(daily_log_id, None)

    def add_day(self, user_id: UUID, day: date, calories: list[int]) -> DailyLog:
        """Seed a day with quick-add entries."""
        log = self.create_daily_log(user_id, day)
        for value in calories:
            self.create_entry(
                log.id,
                FoodEntryDraft(name="Seed", calories=value),
                logged_at=datetime(day.year, day.month, day.day, 12, tzinfo=UTC),
            )
        return log

    def _with_entries(self, log: DailyLog) -> DailyLog:
        entries = sorted(
            (entry for entry in self.entries.values() if entry.daily_log_id == log.id),
            key=lambda entry: entry.logged_at,
        )
        return DailyLog(id=log.id, user_id=log.user_id, day=log.day, entries=entries)


@dataclass
class InMemoryUserSettingsRepository(UserSettingsRepository):
    """In-memory user settings repository for tests."""

    timezones: dict[UUID, str] = field(default_factory=dict)
    onboarded: set[UUID] = field(default_factory=set)

    def get_timezone(self, user_id: UUID) -> str | None:
        return self.timezones.get(user_id)

    def set_timezone(self, user_id: UUID, timezone: str) -> None:
        self.timezones[user_id] = timezone

    def get_onboarding_complete(self, user_id: UUID) -> bool:
        return user_id in self.onboarded

    def set_onboarding_complete(self, user_id: UUID, complete: bool) -> None:
        if complete:
            self.onboarded.add(user_id)
        else:
            self.onboarded.discard(user_id)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest.fixture
def container(settings: Settings) -> AppContainer:
    daily_log_repository = InMemoryDailyLogRepository()
    goal_service = GoalService(InMemoryGoalRepository())
    preset_service = PresetService(InMemoryPresetRepository())
    food_log_service = FoodLogService(
        repository=daily_log_repository,
        preset_service=preset_service,
    )
    return AppContainer(
        settings=settings,
        goal_service=goal_service,
        preset_service=preset_service,
        food_log_service=food_log_service,
        stats_service=StatsService(daily_log_repository),
        user_settings_service=UserSettingsService(
            repository=InMemoryUserSettingsRepository(),
            goal_service=goal_service,
        ),
    )
