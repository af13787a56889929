"""Service layer for business logic."""

from vault.services.file_service import FileService
from vault.services.folder_service import FolderService
from vault.services.share_service import ShareService
from vault.services.upload_service import UploadPipeline

__all__ = [
    "FileService",
    "FolderService",
    "ShareService",
    "UploadPipeline",
]
