"""Supabase repository for ledger snapshots."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from nutriflow.services.snapshots import SnapshotRepository


@dataclass
class SupabaseSnapshotRepository(SnapshotRepository):
    """Supabase implementation of the snapshot blob store."""

    client: Client
    table: str = "ledger_snapshots"

    def load(self, key: str) -> str | None:
        """Return the stored snapshot payload for a key."""
        response = (
            self.client.table(self.table)
            .select("payload")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        payload = response.data[0].get("payload")
        return payload if isinstance(payload, str) else None

    def save(self, key: str, payload: str) -> None:
        """Upsert the snapshot payload for a key."""
        self.client.table(self.table).upsert(
            {
                "key": key,
                "payload": payload,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).execute()
