"""
Context facade: one API surface over folders, files, shares and uploads.

Every operation runs under a single re-entrant lock shared with the upload
pipeline, so a tick is never observed half-applied. Mutations return an
OperationResult instead of raising; the store is flushed after each
successful mutation.
"""

import random
import threading
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar, Union

from common.constants import ROOT_FOLDER_ID
from common.logging_config import get_logger
from common.types import RawFile
from vault import config
from vault.backends import StorageBackend, create_backend
from vault.clock import Clock, SystemClock
from vault.exceptions import StorageUnavailable, VaultError
from vault.repositories import (
    FileRepository,
    FolderRepository,
    HistoryRepository,
    ShareRepository,
)
from vault.scheduler import Scheduler, ThreadingScheduler
from vault.schemas import (
    BreadcrumbEntryResponse,
    FileEntryResponse,
    FolderListingResponse,
    FolderResponse,
    HistoryEntryResponse,
    ShareRecordResponse,
    ShareSettings,
    UploadItemResponse,
)
from vault.services import FileService, FolderService, ShareService, UploadPipeline
from vault.store import VaultStore
from vault.types import FileEntry, Folder, HistoryEntry, OperationResult, ShareRecord, UploadItem

logger = get_logger(__name__)

T = TypeVar("T")


class VaultContext:
    def __init__(
        self,
        store: VaultStore,
        scheduler: Optional[Scheduler] = None,
        clock: Optional[Clock] = None,
        rng: Optional[random.Random] = None,
        tick_interval: float = config.TICK_INTERVAL_SECONDS,
    ):
        self.store = store
        self.clock = clock or store.clock
        self.scheduler = scheduler or ThreadingScheduler()
        self.rng = rng or random.Random()
        self.tick_interval = tick_interval
        self._lock = threading.RLock()
        self._opened = False
        self.last_uploaded: List[FileEntryResponse] = []

    # lifecycle

    def open(self) -> OperationResult[None]:
        """Load the store and wire the services. Safe to call more than once."""
        with self._lock:
            if self._opened:
                return OperationResult.ok()
            load_error: Optional[StorageUnavailable] = None
            try:
                self.store.open()
            except StorageUnavailable as e:
                load_error = e
            self._build_services()
            self._opened = True
            if load_error is not None:
                return OperationResult.fail(load_error.kind, str(load_error))
            return self._commit(None)

    def _build_services(self) -> None:
        self.folder_repo = FolderRepository(self.store)
        self.file_repo = FileRepository(self.store)
        self.share_repo = ShareRepository(self.store)
        self.history_repo = HistoryRepository(self.store)

        self.shares = ShareService(self.share_repo, self.folder_repo, self.file_repo, self.clock)
        self.folder_service = FolderService(self.folder_repo, self.file_repo, self.shares, self.clock)
        self.file_service = FileService(
            self.file_repo, self.folder_repo, self.history_repo, self.shares, self.clock
        )
        self.pipeline = UploadPipeline(
            scheduler=self.scheduler,
            on_complete=self._handle_uploads_complete,
            interval_seconds=self.tick_interval,
            rng=self.rng,
            lock=self._lock,
        )

    def flush(self) -> OperationResult[None]:
        with self._lock:
            return self._commit(None)

    def close(self) -> OperationResult[None]:
        # tick threads wait on the lock, so stop them before taking it
        self.scheduler.shutdown()
        with self._lock:
            if not self._opened:
                return OperationResult.ok()
            self._opened = False
            try:
                self.store.close()
            except StorageUnavailable as e:
                return OperationResult.fail(e.kind, str(e))
            return OperationResult.ok()

    def __enter__(self) -> "VaultContext":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _ensure_open(self) -> None:
        if not self._opened:
            self.open()

    def _commit(self, value: T) -> OperationResult[T]:
        try:
            self.store.flush()
        except StorageUnavailable as e:
            return OperationResult.fail(e.kind, str(e), value=value)
        return OperationResult.ok(value)

    def _execute(self, operation: str, action: Callable[[], T]) -> OperationResult[T]:
        with self._lock:
            self._ensure_open()
            try:
                value = action()
            except VaultError as e:
                logger.debug(f"{operation} failed: {e.kind}: {e}")
                return OperationResult.fail(e.kind, str(e))
            return self._commit(value)

    # read accessors

    def _read(self, action: Callable[[], T]) -> T:
        with self._lock:
            self._ensure_open()
            return action()

    @property
    def folders(self) -> List[FolderResponse]:
        return self._read(lambda: [self._folder_response(f) for f in self.folder_service.list_folders()])

    @property
    def files(self) -> List[FileEntryResponse]:
        return self._read(lambda: [self._file_response(e) for e in self.file_service.list_files()])

    @property
    def current_folder_id(self) -> str:
        return self._read(lambda: self.folder_service.current_folder_id)

    @property
    def folder_path(self) -> List[BreadcrumbEntryResponse]:
        return self._read(lambda: [
            BreadcrumbEntryResponse(id=entry.id, name=entry.name)
            for entry in self.folder_service.breadcrumb()
        ])

    @property
    def shared_items(self) -> List[ShareRecordResponse]:
        return self._read(lambda: [self._share_response(r) for r in self.shares.list_shares()])

    @property
    def upload_queue(self) -> List[UploadItemResponse]:
        return self._read(lambda: [self._upload_response(i) for i in self.pipeline.items()])

    @property
    def is_uploading(self) -> bool:
        return self._read(lambda: self.pipeline.is_running)

    def listing(self, folder_id: Optional[str] = None) -> FolderListingResponse:
        def build() -> FolderListingResponse:
            target = folder_id or self.folder_service.current_folder_id
            return FolderListingResponse(
                folder_id=target,
                breadcrumb=[
                    BreadcrumbEntryResponse(id=entry.id, name=entry.name)
                    for entry in self.folder_service.compute_path(target)
                ],
                folders=[self._folder_response(f) for f in self.folder_service.list_subfolders(target)],
                files=[self._file_response(e) for e in self.file_service.list_by_folder(target)],
            )
        return self._read(build)

    def get_folder(self, folder_id: str) -> Optional[FolderResponse]:
        def build():
            folder = self.folder_service.get_folder(folder_id)
            return self._folder_response(folder) if folder else None
        return self._read(build)

    def get_file(self, file_id: str) -> Optional[FileEntryResponse]:
        def build():
            entry = self.file_service.get_file(file_id)
            return self._file_response(entry) if entry else None
        return self._read(build)

    def find_subfolder(self, name: str, parent_id: Optional[str] = None) -> Optional[FolderResponse]:
        def build():
            folder = self.folder_service.find_child(parent_id or self.folder_service.current_folder_id, name)
            return self._folder_response(folder) if folder else None
        return self._read(build)

    def find_file(self, name: str, folder_id: Optional[str] = None) -> Optional[FileEntryResponse]:
        def build():
            target = folder_id or self.folder_service.current_folder_id
            for entry in self.file_service.list_by_folder(target):
                if entry.name == name:
                    return self._file_response(entry)
            return None
        return self._read(build)

    def shares_for(self, item_type: str, item_id: str) -> List[ShareRecordResponse]:
        return self._read(lambda: [self._share_response(r) for r in self.shares.shares_for(item_type, item_id)])

    def history(self, entry_type: Optional[str] = None) -> List[HistoryEntryResponse]:
        return self._read(lambda: [self._history_response(e) for e in self.file_service.history(entry_type)])

    def verify_share_password(self, share_id: str, password: str) -> bool:
        return self._read(lambda: self.shares.verify_share_password(share_id, password))

    # folder operations

    def create_folder(self, name: str) -> OperationResult[FolderResponse]:
        return self._execute("create_folder", lambda: self._folder_response(
            self.folder_service.create_folder(name, self.folder_service.current_folder_id)
        ))

    def navigate_to_folder(self, folder_id: str) -> OperationResult[str]:
        return self._execute("navigate_to_folder", lambda: self.folder_service.navigate_to(folder_id))

    def navigate_up(self) -> OperationResult[str]:
        def action() -> str:
            folder = self.folder_service.get_folder(self.folder_service.current_folder_id)
            parent_id = folder.parent_id if folder and folder.parent_id else ROOT_FOLDER_ID
            return self.folder_service.navigate_to(parent_id)
        return self._execute("navigate_up", action)

    def remove_folder(self, folder_id: str) -> OperationResult[FolderResponse]:
        def action() -> FolderResponse:
            folder = self.folder_service.remove_folder(folder_id)
            return self._folder_response(folder)
        return self._execute("remove_folder", action)

    # file operations

    def remove_file(self, file_id: str) -> OperationResult[bool]:
        return self._execute("remove_file", lambda: self.file_service.remove_file(file_id))

    # sharing operations

    def share_item(
        self,
        item_type: str,
        item_id: str,
        settings: Union[ShareSettings, Dict[str, Any], None] = None,
        channel: str = "link",
    ) -> OperationResult[ShareRecordResponse]:
        return self._execute("share_item", lambda: self._share_response(
            self.shares.share_item(item_type, item_id, settings or {}, channel)
        ))

    def remove_share(self, share_id: str) -> OperationResult[bool]:
        return self._execute("remove_share", lambda: self.shares.remove_share(share_id))

    def purge_expired_shares(self) -> OperationResult[int]:
        return self._execute("purge_expired_shares", lambda: len(self.shares.purge_expired()))

    # upload operations

    def enqueue_uploads(self, raw_files: Iterable[RawFile]) -> OperationResult[int]:
        return self._execute("enqueue_uploads", lambda: self.pipeline.enqueue(raw_files))

    def dequeue_upload(self, upload_id: str) -> OperationResult[bool]:
        return self._execute("dequeue_upload", lambda: self.pipeline.dequeue(upload_id))

    def start_upload(self) -> OperationResult[int]:
        def action() -> int:
            self.pipeline.start()
            return len(self.pipeline.items())
        return self._execute("start_upload", action)

    def _handle_uploads_complete(self, items: List[UploadItem]) -> None:
        """Hand finished uploads to the file registry under the active folder."""
        target = self.folder_service.current_folder_id
        if self.folder_service.get_folder(target) is None:
            logger.warning(f"Active folder {target} no longer exists, uploads land in {ROOT_FOLDER_ID}")
            target = ROOT_FOLDER_ID
        try:
            entries = self.file_service.add_files(items, target, self.folder_service.path_string(target))
        except VaultError as e:
            logger.error(f"Upload handoff failed, files stay queued: {e}")
            raise
        self.last_uploaded = [self._file_response(entry) for entry in entries]
        try:
            self.store.flush()
        except StorageUnavailable as e:
            logger.error(f"Uploaded files kept in memory only: {e}")

    # response builders

    def _folder_response(self, folder: Folder) -> FolderResponse:
        return FolderResponse(
            id=folder.id,
            name=folder.name,
            parent_id=folder.parent_id,
            path=folder.path,
            created_at=folder.created_at,
            shared=self.shares.is_shared("folder", folder.id),
        )

    def _file_response(self, entry: FileEntry) -> FileEntryResponse:
        return FileEntryResponse(
            id=entry.id,
            name=entry.name,
            size=entry.size,
            type=entry.type,
            folder_id=entry.folder_id,
            folder_path=entry.folder_path,
            added_at=entry.added_at,
            shared=self.shares.is_shared("file", entry.id),
        )

    @staticmethod
    def _share_response(record: ShareRecord) -> ShareRecordResponse:
        return ShareRecordResponse(
            share_id=record.share_id,
            type=record.type,
            item_id=record.item_id,
            channel=record.channel,
            access=record.access,
            expiration=record.expiration,
            custom_expiration=record.custom_expiration,
            require_password=record.require_password,
            allowed_emails=list(record.allowed_emails),
            created_at=record.created_at,
            expires_at=record.expires_at,
        )

    @staticmethod
    def _upload_response(item: UploadItem) -> UploadItemResponse:
        return UploadItemResponse(
            id=item.id,
            name=item.name,
            size=item.size,
            type=item.type,
            progress=item.progress,
            status=item.status,
            uploaded=item.uploaded,
        )

    @staticmethod
    def _history_response(entry: HistoryEntry) -> HistoryEntryResponse:
        return HistoryEntryResponse(
            id=entry.id,
            type=entry.type,
            file_name=entry.file_name,
            file_size=entry.file_size,
            timestamp=entry.timestamp,
            status=entry.status,
        )


def build_context(
    backend: Optional[StorageBackend] = None,
    scheduler: Optional[Scheduler] = None,
    clock: Optional[Clock] = None,
    rng: Optional[random.Random] = None,
    root_name: str = config.ROOT_FOLDER_NAME,
    tick_interval: float = config.TICK_INTERVAL_SECONDS,
) -> VaultContext:
    """
    Wire a VaultContext from configuration, overriding any piece by injection.
    """
    clock = clock or SystemClock()
    backend = backend or create_backend(config.STORAGE_BACKEND, config.DATA_PATH)
    store = VaultStore(backend, root_name=root_name, clock=clock)
    return VaultContext(store, scheduler=scheduler, clock=clock, rng=rng, tick_interval=tick_interval)
