"""
Tick scheduling for the upload pipeline.

The pipeline never sleeps or spawns threads itself; it asks a Scheduler to
call it back at a fixed interval. ManualScheduler advances ticks on demand,
ThreadingScheduler drives them from a daemon thread.
"""

import threading
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from common.logging_config import get_logger

logger = get_logger(__name__)


class ScheduledTask:
    """Handle for a repeating callback."""

    def __init__(self, interval_seconds: float, callback: Callable[[], None]):
        self.interval_seconds = interval_seconds
        self.callback = callback
        self._cancelled = threading.Event()

    @property
    def active(self) -> bool:
        return not self._cancelled.is_set()

    def cancel(self) -> None:
        self._cancelled.set()


class Scheduler(ABC):
    """Schedules repeating callbacks."""

    @abstractmethod
    def schedule_repeating(self, interval_seconds: float, callback: Callable[[], None]) -> ScheduledTask:
        pass

    def shutdown(self) -> None:
        pass


class ManualScheduler(Scheduler):
    """
    Scheduler whose ticks are fired explicitly with advance().

    Each call to advance() runs every active task's callback once, in the
    order the tasks were scheduled.
    """

    def __init__(self):
        self._tasks: List[ScheduledTask] = []
        self.ticks = 0

    def schedule_repeating(self, interval_seconds: float, callback: Callable[[], None]) -> ScheduledTask:
        task = ScheduledTask(interval_seconds, callback)
        self._tasks.append(task)
        return task

    @property
    def pending(self) -> int:
        return sum(1 for task in self._tasks if task.active)

    def advance(self, ticks: int = 1) -> None:
        for _ in range(ticks):
            self._tasks = [task for task in self._tasks if task.active]
            if not self._tasks:
                return
            self.ticks += 1
            for task in list(self._tasks):
                if task.active:
                    task.callback()

    def run_until_idle(self, max_ticks: int = 1000) -> int:
        """
        Advance until no task is active.

        Returns:
            Number of ticks fired
        """
        fired = 0
        while self.pending and fired < max_ticks:
            self.advance()
            fired += 1
        return fired


class ThreadingScheduler(Scheduler):
    """Runs each repeating task on its own daemon thread."""

    def __init__(self):
        self._threads: List[threading.Thread] = []
        self._tasks: List[ScheduledTask] = []

    def schedule_repeating(self, interval_seconds: float, callback: Callable[[], None]) -> ScheduledTask:
        task = ScheduledTask(interval_seconds, callback)
        thread = threading.Thread(
            target=self._run,
            args=(task,),
            daemon=True,
            name="DropVaultTick"
        )
        self._tasks.append(task)
        self._threads.append(thread)
        thread.start()
        logger.debug(f"Scheduled repeating task every {interval_seconds}s")
        return task

    def _run(self, task: ScheduledTask) -> None:
        while not task._cancelled.wait(timeout=task.interval_seconds):
            try:
                task.callback()
            except Exception as e:
                logger.error(f"Error in scheduled task: {e}", exc_info=True)
                task.cancel()

    def shutdown(self, timeout: Optional[float] = 5.0) -> None:
        for task in self._tasks:
            task.cancel()
        current = threading.current_thread()
        for thread in self._threads:
            if thread is not current and thread.is_alive():
                thread.join(timeout=timeout)
        self._threads = []
        self._tasks = []
