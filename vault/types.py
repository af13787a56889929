"""Vault-specific data type definitions."""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Generic, Literal, Optional, Tuple, TypeVar

from common.constants import EXPIRATION_DAYS, PROGRESS_COMPLETE

ItemType = Literal["file", "folder"]
UploadStatus = Literal["ready", "uploading", "complete"]

T = TypeVar("T")


@dataclass(frozen=True)
class Folder:
    """
    A node of the folder tree. `parent_id` is None only for the root.
    """
    id: str
    name: str
    parent_id: Optional[str]
    path: str
    created_at: datetime


@dataclass(frozen=True)
class FileEntry:
    """
    A completed upload bound to exactly one folder.
    """
    id: str
    name: str
    size: int
    type: str
    folder_id: str
    folder_path: str
    added_at: datetime


@dataclass(frozen=True)
class ShareRecord:
    """
    A grant on one file or folder. The password is only ever kept as a bcrypt hash.
    """
    share_id: str
    type: ItemType
    item_id: str
    access: str
    expiration: str
    created_at: datetime
    custom_expiration: Optional[date] = None
    require_password: bool = False
    password_hash: Optional[str] = None
    allowed_emails: Tuple[str, ...] = ()
    channel: str = "link"

    @property
    def expires_at(self) -> Optional[datetime]:
        if self.expiration in EXPIRATION_DAYS:
            return self.created_at + timedelta(days=EXPIRATION_DAYS[self.expiration])
        if self.expiration == "custom" and self.custom_expiration is not None:
            # the custom date stays valid through its last second
            end_of_day = datetime.combine(self.custom_expiration, time.max)
            return end_of_day.replace(tzinfo=self.created_at.tzinfo or timezone.utc)
        return None

    def is_expired(self, now: datetime) -> bool:
        expires_at = self.expires_at
        return expires_at is not None and now > expires_at


@dataclass
class UploadItem:
    """
    A transient entry of the upload queue.
    """
    id: str
    name: str
    size: int
    type: str
    payload: Any = None
    progress: int = 0
    status: UploadStatus = "ready"

    @property
    def uploaded(self) -> bool:
        return self.status == "complete"

    @property
    def is_done(self) -> bool:
        return self.progress >= PROGRESS_COMPLETE


@dataclass(frozen=True)
class HistoryEntry:
    """
    One line of the activity history.
    """
    id: str
    type: Literal["upload", "remove"]
    file_name: str
    file_size: int
    timestamp: datetime
    status: str = "success"


@dataclass
class OperationResult(Generic[T]):
    """
    Outcome of a facade operation: either a value or a typed failure.
    """
    success: bool
    value: Optional[T] = None
    error: Optional[str] = None
    message: str = ""

    @classmethod
    def ok(cls, value: Optional[T] = None, message: str = "") -> "OperationResult[T]":
        return cls(success=True, value=value, message=message)

    @classmethod
    def fail(cls, error: str, message: str, value: Optional[T] = None) -> "OperationResult[T]":
        return cls(success=False, value=value, error=error, message=message)
