"""Folder service: the folder tree, navigation and breadcrumbs."""

from typing import List, Optional

from common.constants import ROOT_FOLDER_ID
from common.logging_config import get_logger
from common.types import BreadcrumbEntry
from vault.clock import Clock
from vault.exceptions import (
    DuplicateNameError,
    FolderNotFoundError,
    NotEmptyError,
    ProtectedEntityError,
    ValidationError,
)
from vault.repositories.file_repository import FileRepository
from vault.repositories.folder_repository import FolderRepository
from vault.services.share_service import ShareService
from vault.types import Folder
from vault.utils import generate_id

logger = get_logger(__name__)


class FolderService:
    def __init__(
        self,
        folder_repo: FolderRepository,
        file_repo: FileRepository,
        share_service: ShareService,
        clock: Clock,
    ):
        self.folder_repo = folder_repo
        self.file_repo = file_repo
        self.share_service = share_service
        self.clock = clock

    @property
    def current_folder_id(self) -> str:
        return self.folder_repo.get_current()

    def create_folder(self, name: str, current_folder_id: str) -> Folder:
        """
        Create a folder under `current_folder_id`.

        Raises:
            ValidationError: If the trimmed name is empty
            FolderNotFoundError: If the parent does not exist
            DuplicateNameError: If a sibling has the same name, ignoring case
        """
        folder_name = (name or "").strip()
        if not folder_name:
            logger.warning("Create folder failed: empty name")
            raise ValidationError("Folder name cannot be empty")

        if not self.folder_repo.exists(current_folder_id):
            logger.warning(f"Create folder failed: parent {current_folder_id} not found")
            raise FolderNotFoundError(f"Folder '{current_folder_id}' does not exist")

        lowered = folder_name.lower()
        for sibling in self.folder_repo.children(current_folder_id):
            if sibling.name.lower() == lowered:
                logger.warning(f"Create folder failed: '{folder_name}' already exists in {current_folder_id}")
                raise DuplicateNameError(f'Folder "{folder_name}" already exists')

        parent_path = self.path_string(current_folder_id)
        folder = Folder(
            id=generate_id("folder"),
            name=folder_name,
            parent_id=current_folder_id,
            path=f"{parent_path}/{folder_name}" if parent_path else folder_name,
            created_at=self.clock.now(),
        )
        self.folder_repo.add(folder)
        logger.info(f"Created folder '{folder.path}' [folder_id={folder.id}]")
        return folder

    def navigate_to(self, folder_id: str) -> str:
        """
        Move the active folder pointer. Unknown ids are accepted and yield an empty breadcrumb.
        """
        if not self.folder_repo.exists(folder_id):
            logger.warning(f"Navigating to unknown folder {folder_id}")
        self.folder_repo.set_current(folder_id)
        return folder_id

    def compute_path(self, folder_id: Optional[str]) -> List[BreadcrumbEntry]:
        """
        Walk parent links from `folder_id` up to the root.

        Returns:
            Root-to-leaf entries. A missing ancestor (or a cycle) ends the
            walk and the partial result is returned.
        """
        result: List[BreadcrumbEntry] = []
        seen = set()
        current_id = folder_id
        while current_id and current_id not in seen:
            folder = self.folder_repo.get(current_id)
            if folder is None:
                break
            seen.add(current_id)
            result.append(BreadcrumbEntry(id=folder.id, name=folder.name))
            current_id = folder.parent_id
        result.reverse()
        return result

    def path_string(self, folder_id: Optional[str]) -> str:
        return "/".join(entry.name for entry in self.compute_path(folder_id))

    def breadcrumb(self) -> List[BreadcrumbEntry]:
        return self.compute_path(self.current_folder_id)

    def remove_folder(self, folder_id: str) -> Folder:
        """
        Delete an empty folder and every share that references it.

        Raises:
            ProtectedEntityError: For the root folder
            FolderNotFoundError: If the folder does not exist
            NotEmptyError: If the folder has child folders or files
        """
        if folder_id == ROOT_FOLDER_ID:
            logger.warning("Remove folder failed: root folder is protected")
            raise ProtectedEntityError("The root folder cannot be deleted")

        folder = self.folder_repo.get(folder_id)
        if folder is None:
            logger.warning(f"Remove folder failed: {folder_id} not found")
            raise FolderNotFoundError(f"Folder '{folder_id}' does not exist")

        if self.folder_repo.children(folder_id) or self.file_repo.has_files_in(folder_id):
            logger.warning(f"Remove folder failed: {folder_id} is not empty")
            raise NotEmptyError("Cannot delete folder with files or subfolders")

        self.folder_repo.delete(folder_id)
        self.share_service.remove_shares_for("folder", folder_id)

        if self.current_folder_id == folder_id:
            self.folder_repo.set_current(folder.parent_id or ROOT_FOLDER_ID)

        logger.info(f"Removed folder '{folder.path}' [folder_id={folder_id}]")
        return folder

    def get_folder(self, folder_id: str) -> Optional[Folder]:
        return self.folder_repo.get(folder_id)

    def list_folders(self) -> List[Folder]:
        return self.folder_repo.all()

    def list_subfolders(self, folder_id: str) -> List[Folder]:
        return sorted(self.folder_repo.children(folder_id), key=lambda f: f.name.lower())

    def find_child(self, parent_id: str, name: str) -> Optional[Folder]:
        lowered = name.strip().lower()
        for folder in self.folder_repo.children(parent_id):
            if folder.name.lower() == lowered:
                return folder
        return None
