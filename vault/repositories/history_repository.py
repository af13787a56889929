"""Activity history repository over the vault store."""

from typing import List, Optional

from common.constants import HISTORY_KEY
from vault.store import VaultStore
from vault.types import HistoryEntry
from vault.utils import from_iso, to_iso


def history_to_dict(entry: HistoryEntry) -> dict:
    return {
        "id": entry.id,
        "type": entry.type,
        "fileName": entry.file_name,
        "fileSize": entry.file_size,
        "timestamp": to_iso(entry.timestamp),
        "status": entry.status,
    }


def history_from_dict(data: dict) -> HistoryEntry:
    return HistoryEntry(
        id=data["id"],
        type=data["type"],
        file_name=data["fileName"],
        file_size=int(data.get("fileSize", 0)),
        timestamp=from_iso(data["timestamp"]),
        status=data.get("status", "success"),
    )


class HistoryRepository:
    def __init__(self, store: VaultStore):
        self.store = store
        self._entries: List[HistoryEntry] = [
            history_from_dict(row) for row in self.store.get(HISTORY_KEY, [])
        ]

    def append(self, entry: HistoryEntry) -> None:
        self._entries.append(entry)
        self.store.put(HISTORY_KEY, [history_to_dict(e) for e in self._entries])

    def list(self, entry_type: Optional[str] = None) -> List[HistoryEntry]:
        """Newest first, optionally filtered by type."""
        entries = [e for e in self._entries if entry_type is None or e.type == entry_type]
        return sorted(reversed(entries), key=lambda e: e.timestamp, reverse=True)
