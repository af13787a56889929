"""File service: the file registry and its activity history."""

from typing import Iterable, List, Optional

from common.logging_config import get_logger
from vault.clock import Clock
from vault.exceptions import FolderNotFoundError
from vault.repositories.file_repository import FileRepository
from vault.repositories.folder_repository import FolderRepository
from vault.repositories.history_repository import HistoryRepository
from vault.services.share_service import ShareService
from vault.types import FileEntry, HistoryEntry, UploadItem
from vault.utils import generate_id

logger = get_logger(__name__)


class FileService:
    def __init__(
        self,
        file_repo: FileRepository,
        folder_repo: FolderRepository,
        history_repo: HistoryRepository,
        share_service: ShareService,
        clock: Clock,
    ):
        self.file_repo = file_repo
        self.folder_repo = folder_repo
        self.history_repo = history_repo
        self.share_service = share_service
        self.clock = clock

    def add_files(
        self,
        items: Iterable[UploadItem],
        current_folder_id: str,
        current_path: str,
    ) -> List[FileEntry]:
        """
        Register completed uploads in a folder.

        Args:
            items: Completed upload items
            current_folder_id: Folder receiving the files
            current_path: Breadcrumb snapshot stamped on each entry

        Returns:
            The stamped FileEntry objects

        Raises:
            FolderNotFoundError: If the folder does not exist
        """
        if not self.folder_repo.exists(current_folder_id):
            logger.warning(f"Add files failed: folder {current_folder_id} not found")
            raise FolderNotFoundError(f"Folder '{current_folder_id}' does not exist")

        added_at = self.clock.now()
        entries = [
            FileEntry(
                id=item.id,
                name=item.name,
                size=item.size,
                type=item.type,
                folder_id=current_folder_id,
                folder_path=current_path,
                added_at=added_at,
            )
            for item in items
        ]
        if not entries:
            return []

        self.file_repo.add_many(entries)
        for entry in entries:
            self.history_repo.append(HistoryEntry(
                id=generate_id("activity"),
                type="upload",
                file_name=entry.name,
                file_size=entry.size,
                timestamp=added_at,
            ))
        logger.info(f"Added {len(entries)} file(s) to '{current_path}' [folder_id={current_folder_id}]")
        return entries

    def remove_file(self, file_id: str) -> bool:
        """
        Remove a file and every share that references it. Unknown ids are a no-op.

        Returns:
            True if a file was removed
        """
        entry = self.file_repo.delete(file_id)
        if entry is None:
            logger.debug(f"Remove file ignored: {file_id} not found")
            return False

        self.share_service.remove_shares_for("file", file_id)
        self.history_repo.append(HistoryEntry(
            id=generate_id("activity"),
            type="remove",
            file_name=entry.name,
            file_size=entry.size,
            timestamp=self.clock.now(),
        ))
        logger.info(f"Removed file '{entry.name}' [file_id={file_id}]")
        return True

    def get_file(self, file_id: str) -> Optional[FileEntry]:
        return self.file_repo.get(file_id)

    def list_files(self) -> List[FileEntry]:
        return self.file_repo.all()

    def list_by_folder(self, folder_id: str) -> List[FileEntry]:
        return sorted(self.file_repo.by_folder(folder_id), key=lambda e: e.added_at)

    def history(self, entry_type: Optional[str] = None) -> List[HistoryEntry]:
        return self.history_repo.list(entry_type)
