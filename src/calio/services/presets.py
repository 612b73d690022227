"""Services for managing food presets."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from calio.domain.entries import FoodEntryDraft
from calio.domain.presets import Preset, PresetDraft
from calio.services.nutrition import scale_calories, scale_value

RECENT_PRESETS_LIMIT = 5


class PresetRepository(Protocol):
    """Persistence interface for presets."""

    def create_preset(self, user_id: UUID, draft: PresetDraft) -> Preset:
        """Create a preset and return it."""

    def update_preset(self, preset_id: UUID, draft: PresetDraft) -> Preset:
        """Update a preset and return it."""

    def get_preset(self, preset_id: UUID) -> Preset | None:
        """Return a preset by id, if present."""

    def list_presets(self, user_id: UUID) -> list[Preset]:
        """Return all presets of a user."""

    def delete_preset(self, preset_id: UUID) -> None:
        """Delete a preset."""

    def set_position(self, preset_id: UUID, position: int) -> None:
        """Store the manual sort position of a preset."""

    def increment_usage(self, preset_id: UUID, used_at: datetime) -> None:
        """Increment usage counters for a preset."""


@dataclass
class PresetService:
    """Application service for preset operations."""

    repository: PresetRepository
    recent_limit: int = RECENT_PRESETS_LIMIT

    def create_preset(self, user_id: UUID, draft: PresetDraft) -> Preset:
        """Create a preset."""
        return self.repository.create_preset(user_id, draft)

    def update_preset(self, preset_id: UUID, draft: PresetDraft) -> Preset:
        """Update an existing preset."""
        return self.repository.update_preset(preset_id, draft)

    def get_preset(self, preset_id: UUID) -> Preset | None:
        """Return a preset by id."""
        return self.repository.get_preset(preset_id)

    def delete_preset(self, preset_id: UUID) -> None:
        """Delete a preset. Entries already logged from it are kept."""
        self.repository.delete_preset(preset_id)

    def list_presets(self, user_id: UUID, query: str | None = None) -> list[Preset]:
        """Return presets in manual order, most used first within a position.

        A query keeps only presets whose name contains it, ignoring case.
        """
        presets = self.repository.list_presets(user_id)
        if query:
            needle = query.casefold()
            presets = [preset for preset in presets if needle in preset.name.casefold()]
        return sorted(
            presets,
            key=lambda preset: (preset.position, -preset.use_count),
        )

    def recent_presets(self, user_id: UUID, limit: int | None = None) -> list[Preset]:
        """Return the most used presets, most recently used first on ties."""
        ranked = self._rank(self.repository.list_presets(user_id))
        return ranked[: limit if limit is not None else self.recent_limit]

    def reorder(self, user_id: UUID, preset_ids: list[UUID]) -> list[Preset]:
        """Persist the given order as preset positions."""
        for position, preset_id in enumerate(preset_ids):
            self.repository.set_position(preset_id, position)
        return self.list_presets(user_id)

    def record_use(self, preset_id: UUID) -> None:
        """Record that a preset has been logged."""
        self.repository.increment_usage(preset_id, used_at=datetime.now(tz=UTC))

    @staticmethod
    def _rank(items: list[Preset]) -> list[Preset]:
        """Rank presets by frequency then recent use."""
        return sorted(
            items,
            key=lambda item: (
                item.use_count,
                item.last_used_at or datetime.min.replace(tzinfo=UTC),
            ),
            reverse=True,
        )


def preset_to_entry(preset: Preset, weight_g: float | None = None) -> FoodEntryDraft:
    """Materialize a preset as an entry draft, scaled to weight_g if given."""
    final_weight = weight_g if weight_g is not None else preset.default_weight_g
    if final_weight == preset.default_weight_g:
        return FoodEntryDraft(
            name=preset.name,
            calories=preset.calories,
            protein_g=preset.protein_g,
            carbs_g=preset.carbs_g,
            fat_g=preset.fat_g,
            weight_g=final_weight,
        )
    base = preset.default_weight_g
    return FoodEntryDraft(
        name=preset.name,
        calories=scale_calories(preset.calories, base, final_weight),
        protein_g=scale_value(preset.protein_g, base, final_weight),
        carbs_g=scale_value(preset.carbs_g, base, final_weight),
        fat_g=scale_value(preset.fat_g, base, final_weight),
        weight_g=final_weight,
    )
