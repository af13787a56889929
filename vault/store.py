"""
Explicit store object over an injectable backend.

The store holds the JSON-compatible form of every logical collection.
Repositories put() new values as they mutate; flush() is the commit point
that writes dirty keys to the backend. A failed write leaves the key dirty
so the next flush retries it, and the in-memory copy stays authoritative.

A key that could not be read at open() is never written back during the
session: its stored value is unknown, so the session's copy stays in
memory only.
"""

from typing import Any, Dict, Optional, Set

from common.constants import (
    ALL_KEYS,
    CURRENT_FOLDER_KEY,
    FOLDERS_KEY,
    ROOT_FOLDER_ID,
)
from common.logging_config import get_logger
from vault.backends import StorageBackend
from vault.clock import Clock, SystemClock
from vault.exceptions import StorageUnavailable

logger = get_logger(__name__)


class VaultStore:
    def __init__(self, backend: StorageBackend, root_name: str, clock: Optional[Clock] = None):
        self.backend = backend
        self.root_name = root_name
        self.clock = clock or SystemClock()
        self._data: Dict[str, Any] = {}
        self._dirty: Set[str] = set()
        self._unreadable: Set[str] = set()
        self.is_open = False

    def open(self) -> "VaultStore":
        """
        Load every collection, seeding the root folder when the medium is empty.

        Raises:
            StorageUnavailable: If the backend cannot be read. The store is
                still opened with seeded defaults so the session can continue,
                and the unreadable keys are excluded from every flush.
        """
        failure: Optional[StorageUnavailable] = None
        self._unreadable = set()
        for key in ALL_KEYS:
            try:
                self._data[key] = self.backend.load(key)
            except StorageUnavailable as e:
                failure = failure or e
                self._unreadable.add(key)
                self._data[key] = None

        if not self._data.get(FOLDERS_KEY):
            self._seed()

        self.is_open = True
        logger.info(f"Store opened [backend={self.backend.name}, dirty={sorted(self._dirty)}]")

        if failure is not None:
            logger.warning(
                f"Store opened with defaults after load failure, "
                f"not writing {sorted(self._unreadable)}: {failure}"
            )
            raise failure
        return self

    def _seed(self) -> None:
        self._data[FOLDERS_KEY] = [{
            "id": ROOT_FOLDER_ID,
            "name": self.root_name,
            "parentId": None,
            "path": self.root_name,
            "createdAt": self.clock.now().isoformat(),
        }]
        self._data[CURRENT_FOLDER_KEY] = ROOT_FOLDER_ID
        if FOLDERS_KEY in self._unreadable:
            # the stored tree exists but could not be read
            logger.warning(f"Using in-memory root folder '{self.root_name}' for this session")
            return
        self._dirty.update({FOLDERS_KEY, CURRENT_FOLDER_KEY})
        logger.info(f"Seeded root folder '{self.root_name}'")

    def get(self, key: str, default: Any = None) -> Any:
        value = self._data.get(key)
        return default if value is None else value

    def put(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._dirty.add(key)

    @property
    def dirty_keys(self) -> Set[str]:
        return set(self._dirty)

    @property
    def unreadable_keys(self) -> Set[str]:
        return set(self._unreadable)

    def flush(self) -> None:
        """
        Write every dirty key to the backend.

        Raises:
            StorageUnavailable: If any key cannot be written, or was never
                read from the backend; it stays dirty.
        """
        failure: Optional[StorageUnavailable] = None
        for key in sorted(self._dirty):
            if key in self._unreadable:
                failure = failure or StorageUnavailable(
                    f"'{key}' could not be loaded from {self.backend.name} storage; "
                    f"changes are kept in memory only"
                )
                continue
            try:
                self.backend.save(key, self._data.get(key))
                self._dirty.discard(key)
            except StorageUnavailable as e:
                failure = failure or e
        if failure is not None:
            logger.error(f"Flush incomplete, keeping dirty keys {sorted(self._dirty)}: {failure}")
            raise failure

    def close(self) -> None:
        if not self.is_open:
            return
        try:
            self.flush()
        finally:
            self.backend.close()
            self.is_open = False
            logger.info("Store closed")
