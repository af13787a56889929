"""Repository layer for data access."""

from vault.repositories.folder_repository import FolderRepository
from vault.repositories.file_repository import FileRepository
from vault.repositories.share_repository import ShareRepository
from vault.repositories.history_repository import HistoryRepository

__all__ = [
    "FolderRepository",
    "FileRepository",
    "ShareRepository",
    "HistoryRepository",
]
