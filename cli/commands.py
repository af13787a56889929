"""Command handler functions for CLI operations."""

import mimetypes
import sys
import time
from pathlib import Path
from typing import Optional, TextIO

from common.constants import DEFAULT_MIME_TYPE, ROOT_FOLDER_ID
from common.logging_config import get_logger
from common.types import RawFile
from cli.config import Config
from cli.models import (
    ChangeDirCommand,
    HistoryCommand,
    ListCommand,
    MakeDirCommand,
    PwdCommand,
    QueueCommand,
    RemoveDirCommand,
    RemoveFileCommand,
    ShareCommand,
    SharesCommand,
    UnqueueCommand,
    UnshareCommand,
    UploadCommand,
    UploadsCommand,
)
from cli.utils import format_file_size, format_progress_bar, format_upload_line
from vault.backends import create_backend
from vault.context import VaultContext, build_context
from vault.scheduler import ThreadingScheduler

logger = get_logger(__name__)


_config: Optional[Config] = None
_context: Optional[VaultContext] = None


def get_config() -> Config:
    global _config
    if _config is None:
        _config = Config(Path.home() / '.dropvault' / 'config.json')
    return _config


def get_context() -> VaultContext:
    """
    Get or create the global VaultContext instance.

    Returns:
        Opened VaultContext
    """
    global _context
    if _context is None:
        config = get_config()
        logger.debug(f"Creating VaultContext [backend={config.get_storage_backend()}]")
        _context = build_context(
            backend=create_backend(config.get_storage_backend(), config.get_data_path()),
            scheduler=ThreadingScheduler(),
            root_name=config.get_root_folder_name(),
            tick_interval=config.get_tick_interval(),
        )
        result = _context.open()
        if not result.success:
            logger.warning(f"Vault opened with defaults: {result.message}")
    return _context


def close_context() -> None:
    global _context
    if _context is not None:
        _context.close()
        _context = None


def _error(result) -> str:
    return f"Error: {result.message}"


def handle_list(cmd: ListCommand, context: Optional[VaultContext] = None) -> str:
    """
    Handle 'ls' command.

    Args:
        cmd: ListCommand
        context: Optional VaultContext for dependency injection (testing)

    Returns:
        Formatted listing of the current folder
    """
    if context is None:
        context = get_context()
    listing = context.listing()
    path = "/".join(entry.name for entry in listing.breadcrumb) or "(unknown folder)"

    if not listing.folders and not listing.files:
        return f"{path}\n  (empty folder)"

    lines = [path]
    for folder in listing.folders:
        shared = " [shared]" if folder.shared else ""
        lines.append(f"  {folder.name}/{shared}")
    for entry in listing.files:
        shared = " [shared]" if entry.shared else ""
        lines.append(f"  {entry.name}  {format_file_size(entry.size)}  {entry.type}{shared}")
    return "\n".join(lines)


def handle_cd(cmd: ChangeDirCommand, context: Optional[VaultContext] = None) -> str:
    """
    Handle 'cd' command.

    Returns:
        New path or error message
    """
    if context is None:
        context = get_context()

    if cmd.target == "/":
        result = context.navigate_to_folder(ROOT_FOLDER_ID)
    elif cmd.target == "..":
        result = context.navigate_up()
    else:
        folder = context.find_subfolder(cmd.target)
        if folder is None:
            return f"Error: Folder '{cmd.target}' not found"
        result = context.navigate_to_folder(folder.id)

    if not result.success:
        return _error(result)
    return "/".join(entry.name for entry in context.folder_path)


def handle_pwd(cmd: PwdCommand, context: Optional[VaultContext] = None) -> str:
    if context is None:
        context = get_context()
    return "/".join(entry.name for entry in context.folder_path) or "(unknown folder)"


def handle_mkdir(cmd: MakeDirCommand, context: Optional[VaultContext] = None) -> str:
    """
    Handle 'mkdir' command.

    Returns:
        Success or error message
    """
    logger.info(f"Executing mkdir command: name={cmd.name}")
    if context is None:
        context = get_context()
    result = context.create_folder(cmd.name)
    if not result.success:
        return _error(result)
    return f'Folder "{result.value.name}" created'


def handle_rmdir(cmd: RemoveDirCommand, context: Optional[VaultContext] = None) -> str:
    """
    Handle 'rmdir' command.

    Returns:
        Success or error message
    """
    if context is None:
        context = get_context()
    folder = context.find_subfolder(cmd.name)
    if folder is None:
        return f"Error: Folder '{cmd.name}' not found"
    result = context.remove_folder(folder.id)
    if not result.success:
        return _error(result)
    return "Folder removed"


def handle_rm(cmd: RemoveFileCommand, context: Optional[VaultContext] = None) -> str:
    """
    Handle 'rm' command.

    Returns:
        Success or error message
    """
    if context is None:
        context = get_context()
    entry = context.find_file(cmd.name)
    if entry is None:
        return f"Error: File '{cmd.name}' not found"
    result = context.remove_file(entry.id)
    if not result.success:
        return _error(result)
    return "File removed"


def _raw_file_from_path(path_str: str) -> RawFile:
    path = Path(path_str).expanduser()
    if not path.is_file():
        raise FileNotFoundError(path_str)
    mime_type, _ = mimetypes.guess_type(path.name)
    return RawFile(
        name=path.name,
        size=path.stat().st_size,
        type=mime_type or DEFAULT_MIME_TYPE,
        payload=str(path.resolve()),
    )


def handle_queue(cmd: QueueCommand, context: Optional[VaultContext] = None) -> str:
    """
    Handle 'queue' command.

    Args:
        cmd: QueueCommand with local file paths
        context: Optional VaultContext for dependency injection (testing)

    Returns:
        Count of queued files plus one line per unreadable path
    """
    logger.info(f"Executing queue command: {len(cmd.paths)} path(s)")
    if context is None:
        context = get_context()

    raw_files = []
    messages = []
    for path_str in cmd.paths:
        try:
            raw_files.append(_raw_file_from_path(path_str))
        except (FileNotFoundError, OSError):
            messages.append(f"Skipped: {path_str} (not a readable file)")

    if raw_files:
        result = context.enqueue_uploads(raw_files)
        if not result.success:
            messages.insert(0, _error(result))
        else:
            messages.insert(0, f"{result.value} files added to upload queue")
    elif not messages:
        messages.append("No files to queue")
    return "\n".join(messages)


def handle_unqueue(cmd: UnqueueCommand, context: Optional[VaultContext] = None) -> str:
    if context is None:
        context = get_context()
    result = context.dequeue_upload(cmd.upload_id)
    if not result.success:
        return _error(result)
    if not result.value:
        return f"Cannot remove {cmd.upload_id}: not queued or an upload is in progress"
    return "File removed from queue"


def handle_uploads(cmd: UploadsCommand, context: Optional[VaultContext] = None) -> str:
    if context is None:
        context = get_context()
    queue = context.upload_queue
    if not queue:
        return "Upload queue is empty"
    lines = [f"{len(queue)} file(s) queued:"]
    for item in queue:
        lines.append(f"  {item.id}  {format_upload_line(item.name, item.size, item.progress, item.status)}")
    return "\n".join(lines)


def handle_upload(
    cmd: UploadCommand,
    context: Optional[VaultContext] = None,
    wait: bool = True,
    poll_interval: Optional[float] = None,
    out: TextIO = sys.stdout,
) -> str:
    """
    Handle 'upload' command.

    Starts the pipeline and, when `wait` is set, renders overall progress
    until the run completes.

    Returns:
        Success or error message with upload results
    """
    logger.info("Executing upload command")
    if context is None:
        context = get_context()

    result = context.start_upload()
    if not result.success:
        return _error(result)

    if not wait:
        return f"Uploading {result.value} file(s)"

    interval = poll_interval if poll_interval is not None else get_config().get_tick_interval() / 2
    while context.is_uploading:
        queue = context.upload_queue
        if queue:
            overall = sum(item.progress for item in queue) // len(queue)
            out.write(f"\rUploading {len(queue)} file(s): {format_progress_bar(overall)}")
            out.flush()
        time.sleep(interval)
    out.write("\n")
    out.flush()

    remaining = context.upload_queue
    if remaining:
        logger.warning(f"Upload run stopped with {len(remaining)} file(s) queued")
        return f"Error: Upload stopped, {len(remaining)} file(s) still queued (run 'upload' to retry)"

    uploaded = context.last_uploaded
    destination = uploaded[0].folder_path if uploaded else "/".join(e.name for e in context.folder_path)
    logger.debug("Upload command completed")
    return f"All files uploaded successfully: {len(uploaded)} file(s) in {destination}"


def handle_share(cmd: ShareCommand, context: Optional[VaultContext] = None) -> str:
    """
    Handle 'share' command.

    Args:
        cmd: ShareCommand with item type, name and settings
        context: Optional VaultContext for dependency injection (testing)

    Returns:
        Share link, invitation confirmation, or error message
    """
    logger.info(f"Executing share command: {cmd.item_type} {cmd.name} access={cmd.access}")
    if context is None:
        context = get_context()

    if cmd.item_type == "folder":
        item = context.find_subfolder(cmd.name)
    else:
        item = context.find_file(cmd.name)
    if item is None:
        return f"Error: {cmd.item_type.capitalize()} '{cmd.name}' not found"

    settings = {
        "access": cmd.access,
        "expiration": cmd.expiration,
        "customExpiration": cmd.custom_expiration,
        "requirePassword": cmd.password is not None,
        "password": cmd.password,
        "allowedEmails": list(cmd.emails),
    }
    channel = "email" if cmd.emails else "link"
    result = context.share_item(cmd.item_type, item.id, settings, channel=channel)
    if not result.success:
        return _error(result)

    share = result.value
    if channel == "email":
        return f"Share invitation sent to {', '.join(cmd.emails)} (share id: {share.share_id})"
    return f"Share link created: {get_config().share_link(share.share_id)}"


def handle_unshare(cmd: UnshareCommand, context: Optional[VaultContext] = None) -> str:
    if context is None:
        context = get_context()
    result = context.remove_share(cmd.share_id)
    if not result.success:
        return _error(result)
    if not result.value:
        return f"No share with id {cmd.share_id}"
    return "Share removed"


def handle_shares(cmd: SharesCommand, context: Optional[VaultContext] = None) -> str:
    """
    Handle 'shares' command.

    Returns:
        One line per share record with item name, access, expiry and link
    """
    if context is None:
        context = get_context()
    shares = context.shared_items
    if not shares:
        return "Nothing is shared"

    config = get_config()
    lines = [f"{len(shares)} share(s):"]
    for share in shares:
        item = context.get_folder(share.item_id) if share.type == "folder" else context.get_file(share.item_id)
        name = item.name if item else share.item_id
        expires = share.expires_at.strftime("%Y-%m-%d %H:%M") if share.expires_at else "never"
        locked = " [password]" if share.require_password else ""
        lines.append(
            f"  {share.share_id}  {share.type} {name}  {share.access}  expires {expires}{locked}  "
            f"{config.share_link(share.share_id)}"
        )
    return "\n".join(lines)


def handle_history(cmd: HistoryCommand, context: Optional[VaultContext] = None) -> str:
    if context is None:
        context = get_context()
    entries = context.history(cmd.entry_type)
    if not entries:
        return "No activity yet"
    lines = []
    for entry in entries:
        timestamp = entry.timestamp.strftime("%Y-%m-%d %H:%M")
        lines.append(
            f"  {timestamp}  {entry.type:<6}  {entry.file_name}  {format_file_size(entry.file_size)}  {entry.status}"
        )
    return "\n".join(lines)
