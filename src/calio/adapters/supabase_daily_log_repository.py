"""Supabase repository for daily logs and food entries."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from calio.domain.entries import DailyLog, FoodEntry, FoodEntryDraft
from calio.services.food_log import DailyLogRepository


@dataclass
class SupabaseDailyLogRepository(DailyLogRepository):
    """Supabase implementation for daily logs.

    Entries reference their day through ``daily_log_id``; deleting a day
    removes its entries first so no orphaned rows remain.
    """

    client: Client

    def get_daily_log(self, user_id: UUID, day: date) -> DailyLog | None:
        """Return the log for a day with its entries."""
        response = (
            self.client.table("daily_logs")
            .select("id, user_id, day")
            .eq("user_id", str(user_id))
            .eq("day", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        entries = self._list_entries([str(row["id"])])
        return _parse_log(row, entries)

    def create_daily_log(self, user_id: UUID, day: date) -> DailyLog:
        """Create an empty log for a day."""
        response = (
            self.client.table("daily_logs")
            .insert({"user_id": str(user_id), "day": day.isoformat()})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create daily log")
        return _parse_log(response.data[0], [])

    def list_daily_logs(self, user_id: UUID, start: date, end: date) -> list[DailyLog]:
        """Return logs with entries between start and end inclusive."""
        response = (
            self.client.table("daily_logs")
            .select("id, user_id, day")
            .eq("user_id", str(user_id))
            .gte("day", start.isoformat())
            .lte("day", end.isoformat())
            .order("day", desc=False)
            .execute()
        )
        rows = response.data or []
        if not rows:
            return []
        entries = self._list_entries([str(row["id"]) for row in rows])
        return [_parse_log(row, entries) for row in rows]

    def create_entry(
        self, daily_log_id: UUID, draft: FoodEntryDraft, logged_at: datetime
    ) -> FoodEntry:
        """Insert an entry for a daily log."""
        response = (
            self.client.table("food_entries")
            .insert(
                {
                    "daily_log_id": str(daily_log_id),
                    **draft.model_dump(),
                    "logged_at": logged_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create food entry")
        return _parse_entry(response.data[0])

    def delete_entry(self, entry_id: UUID) -> None:
        """Delete a single entry."""
        self.client.table("food_entries").delete().eq("id", str(entry_id)).execute()

    def delete_daily_log(self, daily_log_id: UUID) -> None:
        """Delete a day's entries, then the day."""
        self.client.table("food_entries").delete().eq(
            "daily_log_id", str(daily_log_id)
        ).execute()
        self.client.table("daily_logs").delete().eq("id", str(daily_log_id)).execute()

    def _list_entries(self, daily_log_ids: list[str]) -> list[FoodEntry]:
        response = (
            self.client.table("food_entries")
            .select("*")
            .in_("daily_log_id", daily_log_ids)
            .order("logged_at", desc=False)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]


def _parse_log(row: dict[str, object], entries: list[FoodEntry]) -> DailyLog:
    log_id = UUID(str(row["id"]))
    return DailyLog(
        id=log_id,
        user_id=UUID(str(row["user_id"])),
        day=date.fromisoformat(str(row["day"])),
        entries=[entry for entry in entries if entry.daily_log_id == log_id],
    )


def _parse_entry(row: dict[str, object]) -> FoodEntry:
    logged_at_raw = row.get("logged_at")
    logged_at = (
        datetime.fromisoformat(logged_at_raw)
        if isinstance(logged_at_raw, str) and logged_at_raw
        else datetime.min.replace(tzinfo=UTC)
    )
    return FoodEntry(
        id=UUID(str(row["id"])),
        daily_log_id=UUID(str(row["daily_log_id"])),
        name=str(row.get("name", "")),
        calories=int(row.get("calories", 0)),
        protein_g=float(row.get("protein_g", 0.0)),
        carbs_g=float(row.get("carbs_g", 0.0)),
        fat_g=float(row.get("fat_g", 0.0)),
        weight_g=float(row.get("weight_g", 0.0)),
        logged_at=logged_at,
        is_quick_add=bool(row.get("is_quick_add", False)),
    )
