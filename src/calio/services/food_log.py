"""Food logging service."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from calio.domain.entries import QUICK_ADD_NAME, DailyLog, FoodEntry, FoodEntryDraft
from calio.domain.presets import PresetDraft
from calio.domain.stats import DailyTotals
from calio.services.nutrition import aggregate_entries
from calio.services.presets import PresetService, preset_to_entry

_logger = logging.getLogger(__name__)


class DailyLogRepository(Protocol):
    """Persistence interface for daily logs and their entries."""

    def get_daily_log(self, user_id: UUID, day: date) -> DailyLog | None:
        """Return the log for a day with its entries, if present."""

    def create_daily_log(self, user_id: UUID, day: date) -> DailyLog:
        """Create an empty log for a day and return it."""

    def list_daily_logs(self, user_id: UUID, start: date, end: date) -> list[DailyLog]:
        """Return logs with entries for days in [start, end]."""

    def create_entry(
        self, daily_log_id: UUID, draft: FoodEntryDraft, logged_at: datetime
    ) -> FoodEntry:
        """Attach a new entry to a daily log and return it."""

    def delete_entry(self, entry_id: UUID) -> None:
        """Delete a single entry."""

    def delete_daily_log(self, daily_log_id: UUID) -> None:
        """Delete a daily log together with all of its entries."""


def today_in(timezone_name: str) -> date:
    """Return the current calendar day in a timezone."""
    return datetime.now(tz=ZoneInfo(timezone_name)).date()


@dataclass
class FoodLogService:
    """Service that appends entries to the current day's log."""

    repository: DailyLogRepository
    preset_service: PresetService

    def get_or_create_day(self, user_id: UUID, day: date) -> DailyLog:
        """Return the log for a day, creating it on first access."""
        log = self.repository.get_daily_log(user_id, day)
        if log is not None:
            return log
        return self.repository.create_daily_log(user_id, day)

    def get_today(self, user_id: UUID, timezone_name: str) -> DailyLog:
        """Return today's log in the user's timezone."""
        return self.get_or_create_day(user_id, today_in(timezone_name))

    def list_days(self, user_id: UUID, start: date, end: date) -> list[DailyLog]:
        """Return logs for a date range, oldest first."""
        return sorted(
            self.repository.list_daily_logs(user_id, start, end),
            key=lambda log: log.day,
        )

    def quick_add(
        self, user_id: UUID, calories: int, timezone_name: str
    ) -> FoodEntry | None:
        """Log calories without macros or weight. Nothing is logged for 0 kcal."""
        if calories <= 0:
            return None
        draft = FoodEntryDraft(
            name=QUICK_ADD_NAME, calories=calories, is_quick_add=True
        )
        return self._append(user_id, draft, timezone_name)

    def add_entry(
        self,
        user_id: UUID,
        draft: FoodEntryDraft,
        timezone_name: str,
        *,
        save_as_preset: bool = False,
    ) -> FoodEntry | None:
        """Log a detailed entry, optionally saving it as a preset.

        Entries without calories are not logged.
        """
        if draft.calories <= 0:
            return None
        entry = self._append(user_id, draft, timezone_name)
        if save_as_preset and not draft.is_quick_add:
            self.preset_service.create_preset(
                user_id,
                PresetDraft(
                    name=draft.name,
                    calories=draft.calories,
                    protein_g=draft.protein_g,
                    carbs_g=draft.carbs_g,
                    fat_g=draft.fat_g,
                    default_weight_g=draft.weight_g,
                ),
            )
        return entry

    def add_preset_entry(
        self,
        user_id: UUID,
        preset_id: UUID,
        timezone_name: str,
        weight_g: float | None = None,
    ) -> FoodEntry | None:
        """Log a preset, scaled to weight_g when given, and record its use."""
        preset = self.preset_service.get_preset(preset_id)
        if preset is None:
            return None
        entry = self._append(user_id, preset_to_entry(preset, weight_g), timezone_name)
        try:
            self.preset_service.record_use(preset_id)
        except Exception:
            _logger.exception("Failed to record preset usage: preset_id=%s", preset_id)
        return entry

    def delete_entry(self, entry_id: UUID) -> None:
        """Delete a logged entry."""
        self.repository.delete_entry(entry_id)

    def delete_day(self, daily_log_id: UUID) -> None:
        """Delete a day and every entry logged on it."""
        self.repository.delete_daily_log(daily_log_id)

    @staticmethod
    def day_totals(log: DailyLog) -> DailyTotals:
        """Return summed totals for a day's entries."""
        return aggregate_entries(log.day, log.entries)

    def _append(
        self, user_id: UUID, draft: FoodEntryDraft, timezone_name: str
    ) -> FoodEntry:
        log = self.get_today(user_id, timezone_name)
        entry = self.repository.create_entry(
            log.id, draft, logged_at=datetime.now(tz=UTC)
        )
        _logger.info(
            "Logged entry: user_id=%s day=%s calories=%s",
            user_id,
            log.day,
            entry.calories,
        )
        return entry
