"""Pydantic schemas for files, uploads and activity history."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class FileEntryResponse(BaseModel):
    """Response model for file metadata."""
    id: str
    name: str
    size: int
    type: str
    folder_id: str
    folder_path: str
    added_at: datetime
    shared: bool


class UploadItemResponse(BaseModel):
    """Response model for one upload queue entry."""
    id: str
    name: str
    size: int
    type: str
    progress: int
    status: Literal["ready", "uploading", "complete"]
    uploaded: bool


class HistoryEntryResponse(BaseModel):
    """Response model for an activity history line."""
    id: str
    type: Literal["upload", "remove"]
    file_name: str
    file_size: int
    timestamp: datetime
    status: str
