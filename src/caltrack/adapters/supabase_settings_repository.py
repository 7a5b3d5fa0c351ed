"""Supabase key-value store for user settings."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from caltrack.services.user_settings import SettingsStore


@dataclass
class SupabaseSettingsStore(SettingsStore):
    """Stores one row per ``(user_id, key)`` in ``user_settings``."""

    client: Client

    def get_value(self, user_id: UUID, key: str) -> str | None:
        response = (
            self.client.table("user_settings")
            .select("value")
            .eq("user_id", str(user_id))
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("value")

    def set_value(self, user_id: UUID, key: str, value: str) -> None:
        self.client.table("user_settings").upsert(
            {
                "user_id": str(user_id),
                "key": key,
                "value": value,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id,key",
        ).execute()
