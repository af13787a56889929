"""Share record repository with a per-item reference index."""

from datetime import date
from typing import Dict, List, Optional, Set, Tuple

from common.constants import SHARES_KEY
from common.logging_config import get_logger
from vault.store import VaultStore
from vault.types import ShareRecord
from vault.utils import from_iso, to_iso

logger = get_logger(__name__)

ItemKey = Tuple[str, str]


def share_to_dict(record: ShareRecord) -> dict:
    return {
        "shareId": record.share_id,
        "type": record.type,
        "itemId": record.item_id,
        "channel": record.channel,
        "settings": {
            "access": record.access,
            "expiration": record.expiration,
            "customExpiration": record.custom_expiration.isoformat() if record.custom_expiration else None,
            "requirePassword": record.require_password,
            "passwordHash": record.password_hash,
            "allowedEmails": list(record.allowed_emails),
            "createdAt": to_iso(record.created_at),
        },
    }


def share_from_dict(data: dict) -> ShareRecord:
    settings = data.get("settings", {})
    custom = settings.get("customExpiration")
    return ShareRecord(
        share_id=data["shareId"],
        type=data["type"],
        item_id=data["itemId"],
        access=settings.get("access", "view"),
        expiration=settings.get("expiration", "never"),
        created_at=from_iso(settings["createdAt"]),
        custom_expiration=date.fromisoformat(custom) if custom else None,
        require_password=bool(settings.get("requirePassword", False)),
        password_hash=settings.get("passwordHash"),
        allowed_emails=tuple(settings.get("allowedEmails") or ()),
        channel=data.get("channel", "link"),
    )


class ShareRepository:
    """
    Owns share records and the index of which share ids reference each item.

    The index is the single source of truth for an item's shared state:
    an item is shared iff its reference set is non-empty.
    """

    def __init__(self, store: VaultStore):
        self.store = store
        self._records: Dict[str, ShareRecord] = {}
        self._refs: Dict[ItemKey, Set[str]] = {}
        self.reload()

    def reload(self) -> None:
        self._records = {}
        self._refs = {}
        for row in self.store.get(SHARES_KEY, []):
            record = share_from_dict(row)
            self._index(record)
        logger.debug(f"Loaded {len(self._records)} share records")

    def _index(self, record: ShareRecord) -> None:
        self._records[record.share_id] = record
        self._refs.setdefault((record.type, record.item_id), set()).add(record.share_id)

    def _unindex(self, record: ShareRecord) -> None:
        del self._records[record.share_id]
        key = (record.type, record.item_id)
        refs = self._refs.get(key)
        if refs is not None:
            refs.discard(record.share_id)
            if not refs:
                del self._refs[key]

    def get(self, share_id: str) -> Optional[ShareRecord]:
        return self._records.get(share_id)

    def all(self) -> List[ShareRecord]:
        return list(self._records.values())

    def for_item(self, item_type: str, item_id: str) -> List[ShareRecord]:
        share_ids = self._refs.get((item_type, item_id), set())
        return [self._records[share_id] for share_id in share_ids]

    def ref_count(self, item_type: str, item_id: str) -> int:
        return len(self._refs.get((item_type, item_id), ()))

    def is_shared(self, item_type: str, item_id: str) -> bool:
        return self.ref_count(item_type, item_id) > 0

    def add(self, record: ShareRecord) -> ShareRecord:
        self._index(record)
        self._save()
        return record

    def delete(self, share_id: str) -> Optional[ShareRecord]:
        record = self._records.get(share_id)
        if record is None:
            return None
        self._unindex(record)
        self._save()
        return record

    def delete_for_item(self, item_type: str, item_id: str) -> List[ShareRecord]:
        records = self.for_item(item_type, item_id)
        for record in records:
            self._unindex(record)
        if records:
            self._save()
        return records

    def _save(self) -> None:
        self.store.put(SHARES_KEY, [share_to_dict(r) for r in self._records.values()])
