"""
Durable key-value media for the vault store.

A backend maps a logical key to a JSON-compatible value. It has no logic of
its own; every read or write failure surfaces as StorageUnavailable.
"""

import copy
import json
import sqlite3
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Generator, Optional

from common.logging_config import get_logger
from vault.exceptions import StorageUnavailable

logger = get_logger(__name__)


class StorageBackend(ABC):
    """Load/save JSON-compatible values by key."""

    name = "abstract"

    @abstractmethod
    def load(self, key: str) -> Optional[Any]:
        pass

    @abstractmethod
    def save(self, key: str, value: Any) -> None:
        pass

    def close(self) -> None:
        pass


class MemoryBackend(StorageBackend):
    """Keeps values in a dict; values are deep-copied so callers never share state with it."""

    name = "memory"

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self.data: Dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def load(self, key: str) -> Optional[Any]:
        if key not in self.data:
            return None
        return copy.deepcopy(self.data[key])

    def save(self, key: str, value: Any) -> None:
        self.data[key] = copy.deepcopy(value)


class JsonFileBackend(StorageBackend):
    """One JSON file per key under a data directory."""

    name = "json"

    def __init__(self, data_dir: str):
        self.data_dir = Path(data_dir)

    def _path_for(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def load(self, key: str) -> Optional[Any]:
        path = self._path_for(key)
        if not path.exists():
            logger.debug(f"No stored value for {key} at {path}")
            return None
        try:
            with open(path, 'r') as f:
                return json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.error(f"Failed to load {key} from {path}: {e}")
            raise StorageUnavailable(f"Cannot read '{key}' from {path}: {e}") from e

    def save(self, key: str, value: Any) -> None:
        path = self._path_for(key)
        tmp_path = path.with_suffix('.json.tmp')
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, 'w') as f:
                json.dump(value, f, indent=2)
            tmp_path.replace(path)
        except (IOError, OSError, TypeError) as e:
            logger.error(f"Failed to save {key} to {path}: {e}")
            raise StorageUnavailable(f"Cannot write '{key}' to {path}: {e}") from e


class SqliteBackend(StorageBackend):
    """Key-value table in a SQLite database file."""

    name = "sqlite"

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._initialized = False

    @contextmanager
    def _connection(self) -> Generator[sqlite3.Connection, None, None]:
        """
        Context manager for database connections.
        """
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def _init_schema(self) -> None:
        if self._initialized:
            return
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        with self._connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            conn.commit()
        self._initialized = True

    def load(self, key: str) -> Optional[Any]:
        try:
            self._init_schema()
            with self._connection() as conn:
                row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
            if row is None:
                return None
            return json.loads(row["value"])
        except (sqlite3.Error, OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load {key} from {self.db_path}: {e}")
            raise StorageUnavailable(f"Cannot read '{key}' from {self.db_path}: {e}") from e

    def save(self, key: str, value: Any) -> None:
        try:
            self._init_schema()
            payload = json.dumps(value)
            with self._connection() as conn:
                conn.execute(
                    """
                    INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                    """,
                    (key, payload, datetime.now(timezone.utc).isoformat())
                )
                conn.commit()
        except (sqlite3.Error, OSError, TypeError) as e:
            logger.error(f"Failed to save {key} to {self.db_path}: {e}")
            raise StorageUnavailable(f"Cannot write '{key}' to {self.db_path}: {e}") from e


def create_backend(kind: str, data_path: str) -> StorageBackend:
    """
    Build a backend from its configured name.

    Args:
        kind: "memory", "json" or "sqlite"
        data_path: Directory for json files; the sqlite file is placed inside it

    Returns:
        StorageBackend instance
    """
    if kind == "memory":
        return MemoryBackend()
    if kind == "json":
        return JsonFileBackend(data_path)
    if kind == "sqlite":
        return SqliteBackend(str(Path(data_path) / "dropvault.db"))
    raise ValueError(f"Unknown storage backend: {kind}")
