"""Supabase implementation for food presets."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from calio.domain.presets import Preset, PresetDraft
from calio.services.presets import PresetRepository


@dataclass
class SupabasePresetRepository(PresetRepository):
    """Supabase-backed repository for presets."""

    client: Client

    def create_preset(self, user_id: UUID, draft: PresetDraft) -> Preset:
        """Create a preset and return it."""
        response = (
            self.client.table("presets")
            .insert({"user_id": str(user_id), **draft.model_dump()})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create preset")
        return _parse_preset(response.data[0])

    def update_preset(self, preset_id: UUID, draft: PresetDraft) -> Preset:
        """Update a preset and return it."""
        response = (
            self.client.table("presets")
            .update(draft.model_dump())
            .eq("id", str(preset_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update preset")
        return _parse_preset(response.data[0])

    def get_preset(self, preset_id: UUID) -> Preset | None:
        """Return a preset by id, if present."""
        response = (
            self.client.table("presets")
            .select("*")
            .eq("id", str(preset_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_preset(response.data[0])

    def list_presets(self, user_id: UUID) -> list[Preset]:
        """Return presets for a user in manual order."""
        response = (
            self.client.table("presets")
            .select("*")
            .eq("user_id", str(user_id))
            .order("position", desc=False)
            .order("use_count", desc=True)
            .execute()
        )
        return [_parse_preset(row) for row in response.data or []]

    def delete_preset(self, preset_id: UUID) -> None:
        """Delete a preset."""
        self.client.table("presets").delete().eq("id", str(preset_id)).execute()

    def set_position(self, preset_id: UUID, position: int) -> None:
        """Store the manual sort position."""
        self.client.table("presets").update({"position": position}).eq(
            "id", str(preset_id)
        ).execute()

    def increment_usage(self, preset_id: UUID, used_at: datetime) -> None:
        """Increment usage counters for a preset."""
        response = (
            self.client.table("presets")
            .select("use_count")
            .eq("id", str(preset_id))
            .limit(1)
            .execute()
        )
        current = 0
        if response.data:
            current = int(response.data[0].get("use_count", 0))
        self.client.table("presets").update(
            {
                "use_count": current + 1,
                "last_used_at": used_at.isoformat(),
            }
        ).eq("id", str(preset_id)).execute()


def _parse_preset(row: dict[str, object]) -> Preset:
    """Parse a preset row into a domain model."""
    last_used_raw = row.get("last_used_at")
    last_used_at = (
        datetime.fromisoformat(last_used_raw)
        if isinstance(last_used_raw, str) and last_used_raw
        else None
    )
    return Preset(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        name=str(row.get("name", "")),
        calories=int(row.get("calories", 0)),
        protein_g=float(row.get("protein_g", 0.0)),
        carbs_g=float(row.get("carbs_g", 0.0)),
        fat_g=float(row.get("fat_g", 0.0)),
        default_weight_g=float(row.get("default_weight_g", 100.0)),
        use_count=int(row.get("use_count", 0)),
        last_used_at=last_used_at,
        position=int(row.get("position", 0)),
    )
