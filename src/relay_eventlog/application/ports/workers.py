"""Port for the worker pool draining the queue."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class WorkerPoolPort(Protocol):
    """Fixed set of consumers that exit once the queue is closed and drained."""

    def start(self) -> None:
        """Spawn the workers."""

    def wait(self, timeout: float | None = None) -> bool:
        """Block until every worker has exited; ``False`` on timeout."""


__all__ = ["WorkerPoolPort"]
