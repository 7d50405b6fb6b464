"""Lifecycle states of the event log service."""

from __future__ import annotations

from enum import Enum


class ServiceState(Enum):
    """Lifecycle of a single :class:`EventLogService` instance.

    A service moves ``UNINITIALIZED -> RUNNING -> CLOSED`` exactly once.

    Examples
    --------
    >>> ServiceState.RUNNING.accepts_events
    True
    >>> ServiceState.CLOSED.accepts_events
    False
    """

    UNINITIALIZED = "uninitialized"
    RUNNING = "running"
    CLOSED = "closed"

    @property
    def accepts_events(self) -> bool:
        """Return ``True`` when ``record_event`` has any effect."""

        return self is ServiceState.RUNNING


__all__ = ["ServiceState"]
