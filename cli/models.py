"""Command request data types for CLI."""

from dataclasses import dataclass
from typing import Literal, Optional


@dataclass(frozen=True)
class ListCommand:
    """List folders and files in the current folder."""

    command: Literal["ls"] = "ls"


@dataclass(frozen=True)
class ChangeDirCommand:
    """Navigate to a subfolder, the parent ('..') or the root ('/')."""

    target: str
    command: Literal["cd"] = "cd"


@dataclass(frozen=True)
class PwdCommand:
    """Show the breadcrumb of the current folder."""

    command: Literal["pwd"] = "pwd"


@dataclass(frozen=True)
class MakeDirCommand:
    """Create a folder in the current folder."""

    name: str
    command: Literal["mkdir"] = "mkdir"


@dataclass(frozen=True)
class RemoveDirCommand:
    """Delete an empty subfolder of the current folder."""

    name: str
    command: Literal["rmdir"] = "rmdir"


@dataclass(frozen=True)
class RemoveFileCommand:
    """Delete a file of the current folder."""

    name: str
    command: Literal["rm"] = "rm"


@dataclass(frozen=True)
class QueueCommand:
    """Add local files to the upload queue."""

    paths: tuple[str, ...]
    command: Literal["queue"] = "queue"


@dataclass(frozen=True)
class UnqueueCommand:
    """Remove an item from the upload queue."""

    upload_id: str
    command: Literal["unqueue"] = "unqueue"


@dataclass(frozen=True)
class UploadsCommand:
    """Show the upload queue."""

    command: Literal["uploads"] = "uploads"


@dataclass(frozen=True)
class UploadCommand:
    """Run the upload pipeline until every queued file completes."""

    command: Literal["upload"] = "upload"


@dataclass(frozen=True)
class ShareCommand:
    """Share a file or folder of the current folder."""

    item_type: Literal["file", "folder"]
    name: str
    access: str = "view"
    expiration: str = "never"
    custom_expiration: Optional[str] = None
    password: Optional[str] = None
    emails: tuple[str, ...] = ()
    command: Literal["share"] = "share"


@dataclass(frozen=True)
class UnshareCommand:
    """Delete a share record."""

    share_id: str
    command: Literal["unshare"] = "unshare"


@dataclass(frozen=True)
class SharesCommand:
    """List share records with their links."""

    command: Literal["shares"] = "shares"


@dataclass(frozen=True)
class HistoryCommand:
    """Show activity history, optionally filtered by type."""

    entry_type: Optional[str] = None
    command: Literal["history"] = "history"


CommandRequest = (
    ListCommand
    | ChangeDirCommand
    | PwdCommand
    | MakeDirCommand
    | RemoveDirCommand
    | RemoveFileCommand
    | QueueCommand
    | UnqueueCommand
    | UploadsCommand
    | UploadCommand
    | ShareCommand
    | UnshareCommand
    | SharesCommand
    | HistoryCommand
)
