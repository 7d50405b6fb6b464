"""Delivery counters for accepted, written, and dropped events.

Purpose
-------
Give operators a way to see what the fire-and-forget pipeline did with the
events it was handed: how many were accepted, how many reached the sink, and
how many were lost to backpressure, lifecycle, or write failures.

Contents
--------
* :class:`DropReason` - stable labels used by notices and diagnostics.
* :class:`DeliveryStats` - immutable snapshot returned to callers.
* :class:`DeliveryCounters` - thread-safe mutable counters owned by a service.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum


class DropReason(str, Enum):
    """Why an event never reached the queue."""

    QUEUE_FULL = "queue_full"
    NOT_RUNNING = "not_running"


@dataclass(slots=True, frozen=True)
class DeliveryStats:
    """Point-in-time view over the delivery counters.

    Examples
    --------
    >>> stats = DeliveryStats(accepted=3, written=2, dropped_queue_full=1)
    >>> stats.dropped
    1
    >>> stats.pending
    1
    """

    accepted: int = 0
    written: int = 0
    dropped_queue_full: int = 0
    dropped_not_running: int = 0
    write_failures: int = 0

    @property
    def dropped(self) -> int:
        """Return the number of events rejected before reaching the queue."""

        return self.dropped_queue_full + self.dropped_not_running

    @property
    def pending(self) -> int:
        """Return accepted events not yet written or failed."""

        return self.accepted - self.written - self.write_failures


class DeliveryCounters:
    """Thread-safe counters shared by producers and workers."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._accepted = 0
        self._written = 0
        self._dropped: dict[DropReason, int] = {reason: 0 for reason in DropReason}
        self._write_failures = 0

    def note_accepted(self) -> None:
        with self._lock:
            self._accepted += 1

    def note_written(self) -> None:
        with self._lock:
            self._written += 1

    def note_dropped(self, reason: DropReason) -> None:
        with self._lock:
            self._dropped[reason] += 1

    def note_write_failure(self) -> None:
        with self._lock:
            self._write_failures += 1

    def snapshot(self) -> DeliveryStats:
        """Return an immutable copy of the current counters."""

        with self._lock:
            return DeliveryStats(
                accepted=self._accepted,
                written=self._written,
                dropped_queue_full=self._dropped[DropReason.QUEUE_FULL],
                dropped_not_running=self._dropped[DropReason.NOT_RUNNING],
                write_failures=self._write_failures,
            )


__all__ = ["DeliveryCounters", "DeliveryStats", "DropReason"]
