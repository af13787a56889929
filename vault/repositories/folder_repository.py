"""Folder repository over the vault store."""

from typing import Dict, List, Optional

from common.constants import CURRENT_FOLDER_KEY, FOLDERS_KEY, ROOT_FOLDER_ID
from common.logging_config import get_logger
from vault.store import VaultStore
from vault.types import Folder
from vault.utils import from_iso, to_iso

logger = get_logger(__name__)


def folder_to_dict(folder: Folder) -> dict:
    return {
        "id": folder.id,
        "name": folder.name,
        "parentId": folder.parent_id,
        "path": folder.path,
        "createdAt": to_iso(folder.created_at),
    }


def folder_from_dict(data: dict) -> Folder:
    return Folder(
        id=data["id"],
        name=data["name"],
        parent_id=data.get("parentId"),
        path=data.get("path", data["name"]),
        created_at=from_iso(data["createdAt"]),
    )


class FolderRepository:
    def __init__(self, store: VaultStore):
        self.store = store
        self._folders: Dict[str, Folder] = {}
        self.reload()

    def reload(self) -> None:
        self._folders = {}
        for row in self.store.get(FOLDERS_KEY, []):
            folder = folder_from_dict(row)
            self._folders[folder.id] = folder
        logger.debug(f"Loaded {len(self._folders)} folders")

    def get(self, folder_id: str) -> Optional[Folder]:
        return self._folders.get(folder_id)

    def exists(self, folder_id: str) -> bool:
        return folder_id in self._folders

    def all(self) -> List[Folder]:
        return list(self._folders.values())

    def children(self, parent_id: str) -> List[Folder]:
        return [folder for folder in self._folders.values() if folder.parent_id == parent_id]

    def add(self, folder: Folder) -> Folder:
        self._folders[folder.id] = folder
        self._save()
        return folder

    def delete(self, folder_id: str) -> bool:
        if folder_id not in self._folders:
            return False
        del self._folders[folder_id]
        self._save()
        return True

    def get_current(self) -> str:
        return self.store.get(CURRENT_FOLDER_KEY, ROOT_FOLDER_ID)

    def set_current(self, folder_id: str) -> None:
        self.store.put(CURRENT_FOLDER_KEY, folder_id)

    def _save(self) -> None:
        self.store.put(FOLDERS_KEY, [folder_to_dict(f) for f in self._folders.values()])
