"""Pydantic schemas for folders and navigation."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from vault.schemas.files import FileEntryResponse


class FolderResponse(BaseModel):
    """Response model for folder metadata."""
    id: str
    name: str
    parent_id: Optional[str] = None
    path: str
    created_at: datetime
    shared: bool


class BreadcrumbEntryResponse(BaseModel):
    """One step of the breadcrumb."""
    id: str
    name: str


class FolderListingResponse(BaseModel):
    """Response model for the contents of one folder."""
    folder_id: str
    breadcrumb: List[BreadcrumbEntryResponse]
    folders: List[FolderResponse]
    files: List[FileEntryResponse]
