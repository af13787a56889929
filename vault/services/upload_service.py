"""
Upload pipeline: a transient queue advanced by scheduler ticks.

Item states run ready -> uploading -> complete. A run starts with start()
and ends on the tick where every queued item reaches 100%; the completed
items are then handed to `on_complete` and leave the queue once it
returns. If a tick raises, the run stops and the items stay queued so a
later start() can retry them. There is no failure state and no cancel.
"""

import random
import threading
from typing import Callable, Iterable, List, Optional

from common.constants import (
    DEFAULT_MIME_TYPE,
    PROGRESS_COMPLETE,
    PROGRESS_INCREMENT_MAX,
    PROGRESS_INCREMENT_MIN,
)
from common.logging_config import get_logger
from common.types import RawFile
from vault.exceptions import EmptyQueueError, UploadInProgressError
from vault.scheduler import ScheduledTask, Scheduler
from vault.types import UploadItem
from vault.utils import generate_id

logger = get_logger(__name__)

CompletionHandler = Callable[[List[UploadItem]], None]


class UploadPipeline:
    def __init__(
        self,
        scheduler: Scheduler,
        on_complete: CompletionHandler,
        interval_seconds: float,
        rng: Optional[random.Random] = None,
        lock: Optional[threading.RLock] = None,
    ):
        self.scheduler = scheduler
        self.on_complete = on_complete
        self.interval_seconds = interval_seconds
        self.rng = rng or random.Random()
        self._lock = lock or threading.RLock()
        self._queue: List[UploadItem] = []
        self._task: Optional[ScheduledTask] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None

    def items(self) -> List[UploadItem]:
        with self._lock:
            return list(self._queue)

    def get(self, upload_id: str) -> Optional[UploadItem]:
        with self._lock:
            for item in self._queue:
                if item.id == upload_id:
                    return item
            return None

    def enqueue(self, raw_files: Iterable[RawFile]) -> int:
        """
        Add raw files to the queue in the `ready` state.

        Returns:
            Number of items added
        """
        with self._lock:
            added = 0
            for raw in raw_files:
                self._queue.append(UploadItem(
                    id=generate_id("upload"),
                    name=raw.name,
                    size=max(0, int(raw.size)),
                    type=raw.type or DEFAULT_MIME_TYPE,
                    payload=raw.payload,
                ))
                added += 1
            logger.info(f"{added} file(s) added to upload queue [queued={len(self._queue)}]")
            return added

    def dequeue(self, upload_id: str) -> bool:
        """
        Remove a queued item. Nothing can be removed while a run is active.

        Returns:
            True if the item was removed
        """
        with self._lock:
            for index, item in enumerate(self._queue):
                if item.id != upload_id:
                    continue
                if self.is_running:
                    logger.warning(f"Dequeue rejected: {upload_id} belongs to the active run")
                    return False
                del self._queue[index]
                logger.info(f"Removed {item.name} from upload queue [upload_id={upload_id}]")
                return True
            logger.debug(f"Dequeue ignored: {upload_id} not queued")
            return False

    def start(self) -> None:
        """
        Begin a run.

        Raises:
            EmptyQueueError: If nothing is queued
            UploadInProgressError: If a run is already active
        """
        with self._lock:
            if not self._queue:
                logger.warning("Upload start rejected: queue is empty")
                raise EmptyQueueError("No files to upload")
            if self.is_running:
                logger.info("Upload start rejected: run already active")
                raise UploadInProgressError("Upload already in progress")

            self._task = self.scheduler.schedule_repeating(self.interval_seconds, self._tick)
            logger.info(f"Upload run started for {len(self._queue)} file(s)")

    def _tick(self) -> None:
        with self._lock:
            if self._task is None:
                return
            try:
                self._advance()
            except Exception:
                logger.error("Upload run aborted, queued items kept")
                self._stop()
                raise

    def _advance(self) -> None:
        for item in self._queue:
            if item.progress < PROGRESS_COMPLETE:
                increment = self.rng.randint(PROGRESS_INCREMENT_MIN, PROGRESS_INCREMENT_MAX)
                item.progress = min(item.progress + increment, PROGRESS_COMPLETE)
                item.status = "complete" if item.progress == PROGRESS_COMPLETE else "uploading"

        if not all(item.is_done for item in self._queue):
            return

        self._stop()
        completed = list(self._queue)
        self.on_complete(completed)
        handed_off = {item.id for item in completed}
        self._queue = [item for item in self._queue if item.id not in handed_off]
        logger.info(f"All files uploaded successfully ({len(completed)} file(s))")

    def _stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None
