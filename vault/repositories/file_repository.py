"""File entry repository over the vault store."""

from typing import Dict, Iterable, List, Optional

from common.constants import DEFAULT_MIME_TYPE, FILES_KEY
from common.logging_config import get_logger
from vault.store import VaultStore
from vault.types import FileEntry
from vault.utils import from_iso, to_iso

logger = get_logger(__name__)


def file_to_dict(entry: FileEntry) -> dict:
    return {
        "id": entry.id,
        "name": entry.name,
        "size": entry.size,
        "type": entry.type,
        "folderId": entry.folder_id,
        "folderPath": entry.folder_path,
        "addedAt": to_iso(entry.added_at),
    }


def file_from_dict(data: dict) -> FileEntry:
    return FileEntry(
        id=data["id"],
        name=data["name"],
        size=int(data.get("size", 0)),
        type=data.get("type") or DEFAULT_MIME_TYPE,
        folder_id=data["folderId"],
        folder_path=data.get("folderPath", ""),
        added_at=from_iso(data["addedAt"]),
    )


class FileRepository:
    def __init__(self, store: VaultStore):
        self.store = store
        self._files: Dict[str, FileEntry] = {}
        self.reload()

    def reload(self) -> None:
        self._files = {}
        for row in self.store.get(FILES_KEY, []):
            entry = file_from_dict(row)
            self._files[entry.id] = entry
        logger.debug(f"Loaded {len(self._files)} file entries")

    def get(self, file_id: str) -> Optional[FileEntry]:
        return self._files.get(file_id)

    def exists(self, file_id: str) -> bool:
        return file_id in self._files

    def all(self) -> List[FileEntry]:
        return list(self._files.values())

    def by_folder(self, folder_id: str) -> List[FileEntry]:
        return [entry for entry in self._files.values() if entry.folder_id == folder_id]

    def has_files_in(self, folder_id: str) -> bool:
        return any(entry.folder_id == folder_id for entry in self._files.values())

    def add_many(self, entries: Iterable[FileEntry]) -> None:
        for entry in entries:
            self._files[entry.id] = entry
        self._save()

    def delete(self, file_id: str) -> Optional[FileEntry]:
        entry = self._files.pop(file_id, None)
        if entry is not None:
            self._save()
        return entry

    def _save(self) -> None:
        self.store.put(FILES_KEY, [file_to_dict(e) for e in self._files.values()])
