"""Deferred one-shot task scheduler driven by host time."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from heapq import heappop, heappush

TaskCallback = Callable[[], None]

_LOG = logging.getLogger(__name__)


@dataclass(slots=True)
class _Task:
    task_id: int
    due_seconds: float
    callback: TaskCallback
    cancelled: bool = False


class Scheduler:
    """Cancellable deferred callbacks, advanced explicitly by the host.

    Nothing here sleeps or spawns threads. The host calls `advance` (or
    `run_due` with an absolute clock) from its frame loop and due callbacks
    run synchronously, in due-time order, on the caller's thread.
    """

    def __init__(self) -> None:
        self._now_seconds = 0.0
        self._next_task_id = 1
        self._tasks: dict[int, _Task] = {}
        self._queue: list[tuple[float, int]] = []

    @property
    def now_seconds(self) -> float:
        return self._now_seconds

    @property
    def pending_count(self) -> int:
        """Return count of scheduled tasks that have not run or been cancelled."""
        return sum(1 for task in self._tasks.values() if not task.cancelled)

    def is_pending(self, task_id: int) -> bool:
        task = self._tasks.get(task_id)
        return task is not None and not task.cancelled

    def call_later(self, delay_seconds: float, callback: TaskCallback) -> int:
        """Schedule a one-shot callback after delay. Returns the task id."""
        if delay_seconds < 0.0:
            raise ValueError("delay_seconds must be >= 0")
        task_id = self._next_task_id
        self._next_task_id += 1
        due_seconds = self._now_seconds + delay_seconds
        self._tasks[task_id] = _Task(task_id=task_id, due_seconds=due_seconds, callback=callback)
        heappush(self._queue, (due_seconds, task_id))
        _LOG.debug("task_scheduled id=%d due=%.3f", task_id, due_seconds)
        return task_id

    def cancel_task(self, task_id: int) -> bool:
        """Cancel a scheduled task. Returns whether a pending task was cancelled."""
        task = self._tasks.get(task_id)
        if task is None or task.cancelled:
            return False
        task.cancelled = True
        _LOG.debug("task_cancelled id=%d", task_id)
        return True

    def cancel_all(self) -> int:
        """Cancel every pending task and return how many were cancelled."""
        cancelled = 0
        for task in self._tasks.values():
            if not task.cancelled:
                task.cancelled = True
                cancelled += 1
        self._tasks.clear()
        self._queue.clear()
        return cancelled

    def advance(self, delta_seconds: float) -> int:
        """Advance scheduler clock and run due callbacks."""
        if delta_seconds < 0.0:
            raise ValueError("delta_seconds must be >= 0")
        return self.run_due(self._now_seconds + delta_seconds)

    def run_due(self, now_seconds: float) -> int:
        """Run callbacks due at or before `now_seconds`."""
        if now_seconds < self._now_seconds:
            raise ValueError("now_seconds cannot move backwards")
        self._now_seconds = now_seconds
        executed = 0
        while self._queue and self._queue[0][0] <= self._now_seconds:
            _, task_id = heappop(self._queue)
            task = self._tasks.pop(task_id, None)
            if task is None or task.cancelled:
                continue
            task.callback()
            executed += 1
        return executed
