"""Port describing the bounded queue between producers and workers."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class EventQueuePort(Protocol):
    """Fixed-capacity FIFO shared by producers and the worker pool."""

    def try_put(self, event: str) -> bool:
        """Enqueue ``event`` without blocking; ``False`` when full or closed."""

    def get(self) -> tuple[str | None, bool]:
        """Block until an event is available or the queue is closed and drained."""

    def close_for_writes(self) -> None:
        """Reject further writes while keeping buffered events dequeue-able."""

    @property
    def closed(self) -> bool:
        """Return ``True`` once writes are rejected."""


__all__ = ["EventQueuePort"]
