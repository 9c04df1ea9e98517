"""Minimal host shell for running a game controller without an engine."""

from __future__ import annotations

import logging
from collections.abc import Callable

from broadside.runtime.scheduler import Scheduler

_LOG = logging.getLogger(__name__)


class LocalHost:
    """Host control surface backed by an explicitly advanced scheduler.

    Used by tests and by embedders that drive time themselves. An engine
    host exposes the same `call_later` / `cancel_task` / `close` surface.
    """

    def __init__(self, scheduler: Scheduler | None = None) -> None:
        self._scheduler = scheduler or Scheduler()
        self._close_requested = False

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def should_close(self) -> bool:
        return self._close_requested

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> int:
        """Schedule a one-shot callback in host time."""
        return self._scheduler.call_later(delay_seconds, callback)

    def cancel_task(self, task_id: int) -> None:
        """Cancel a previously scheduled task."""
        self._scheduler.cancel_task(task_id)

    def is_pending(self, task_id: int) -> bool:
        return self._scheduler.is_pending(task_id)

    def close(self) -> None:
        """Request host shutdown."""
        if not self._close_requested:
            _LOG.info("host_close_requested")
        self._close_requested = True

    def advance(self, delta_seconds: float) -> int:
        """Advance host time, running due tasks. Returns executed task count."""
        return self._scheduler.advance(delta_seconds)

    def shutdown(self) -> None:
        """Drop every pending task.

        Controllers notice dropped tasks through `is_pending`; calling
        `GameController.shutdown()` first also publishes the cancellation.
        """
        dropped = self._scheduler.cancel_all()
        if dropped:
            _LOG.info("host_shutdown dropped_tasks=%d", dropped)
