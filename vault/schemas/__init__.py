"""Pydantic schemas for vault inputs and read models."""

from vault.schemas.files import (
    FileEntryResponse,
    HistoryEntryResponse,
    UploadItemResponse,
)
from vault.schemas.folders import (
    BreadcrumbEntryResponse,
    FolderListingResponse,
    FolderResponse,
)
from vault.schemas.shares import ShareRecordResponse, ShareSettings

__all__ = [
    "FileEntryResponse",
    "HistoryEntryResponse",
    "UploadItemResponse",
    "BreadcrumbEntryResponse",
    "FolderListingResponse",
    "FolderResponse",
    "ShareRecordResponse",
    "ShareSettings",
]
