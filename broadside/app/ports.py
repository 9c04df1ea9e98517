"""Host-facing ports the controller depends on."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable


@runtime_checkable
class TaskScheduler(Protocol):
    """Deferred-callback surface offered by the host."""

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> int:
        """Schedule a one-shot callback in host runtime time."""

    def cancel_task(self, task_id: int) -> None:
        """Cancel a previously scheduled task."""


@runtime_checkable
class HostControl(TaskScheduler, Protocol):
    """Host control surface exposed to the game controller."""

    def close(self) -> None:
        """Request host shutdown."""


@runtime_checkable
class TaskInspector(Protocol):
    """Optional host surface reporting whether a scheduled task is still queued."""

    def is_pending(self, task_id: int) -> bool:
        """Return whether the task has neither run nor been cancelled."""
