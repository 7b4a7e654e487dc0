"""Delayed-callback schedulers used to pace AI turns.

The engine only needs ``schedule(delay, callback)`` returning a handle with
``cancel()``. ``ThreadingScheduler`` runs callbacks on timer threads for
interactive play; ``ManualScheduler`` queues them so tests and the CLI can
drive AI turns deterministically.
"""

import itertools
import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class ScheduledTask:
    """Handle for a pending callback."""
    delay: float
    callback: Callable[[], None]
    task_id: int = 0
    cancelled: bool = False
    _timer: Optional[threading.Timer] = field(default=None, repr=False)

    def cancel(self):
        self.cancelled = True
        if self._timer is not None:
            self._timer.cancel()

    def run(self):
        if not self.cancelled:
            self.callback()


class ThreadingScheduler:
    """Runs each callback on a daemon ``threading.Timer``."""

    def __init__(self):
        self._ids = itertools.count(1)

    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        task = ScheduledTask(delay=delay, callback=callback, task_id=next(self._ids))
        timer = threading.Timer(delay, task.run)
        timer.daemon = True
        task._timer = timer
        timer.start()
        logger.debug("Scheduled task %d in %.2fs", task.task_id, delay)
        return task


class ManualScheduler:
    """Queues callbacks until the caller runs them. Delays are recorded but not waited."""

    def __init__(self):
        self._ids = itertools.count(1)
        self.pending: List[ScheduledTask] = []

    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        task = ScheduledTask(delay=delay, callback=callback, task_id=next(self._ids))
        self.pending.append(task)
        return task

    def has_pending(self) -> bool:
        self._prune()
        return bool(self.pending)

    def run_next(self) -> bool:
        """Run the oldest live callback. Returns False if nothing was queued."""
        self._prune()
        if not self.pending:
            return False
        task = self.pending.pop(0)
        task.run()
        return True

    def run_pending(self, limit: int = 10000) -> int:
        """Run callbacks (including ones they schedule) until the queue drains.

        Args:
            limit: Safety cap on the number of callbacks run.

        Returns:
            Number of callbacks run.
        """
        count = 0
        while count < limit and self.run_next():
            count += 1
        return count

    def _prune(self):
        self.pending = [t for t in self.pending if not t.cancelled]
