"""Supabase-backed key-value storage."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from bitesnaps.services.store import KeyValueStorage


@dataclass
class SupabaseStorage(KeyValueStorage):
    """Supabase implementation storing each record as a table row."""

    client: Client
    table_name: str = "kv_store"

    def get(self, key: str) -> str | None:
        """Return the stored value for a key, if present."""
        response = (
            self.client.table(self.table_name)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("value")

    def set(self, key: str, value: str) -> None:
        """Insert or overwrite the row for a key."""
        self.client.table(self.table_name).upsert(
            {
                "key": key,
                "value": value,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).execute()

    def clear(self) -> None:
        """Delete every row in the table."""
        self.client.table(self.table_name).delete().neq("key", "").execute()
