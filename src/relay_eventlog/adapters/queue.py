"""Bounded, closable FIFO between event producers and the worker pool.

Purpose
-------
Hold accepted events until a worker writes them. Producers never wait on this
queue: a full queue rejects the event immediately so request paths keep their
throughput when the log falls behind.

Contents
--------
* :class:`BoundedEventQueue` - implementation of :class:`EventQueuePort`.

System Role
-----------
Shared by :meth:`EventLogService.record_event` (producer side) and
:class:`WorkerPool` (consumer side). Closing the queue is the signal that
tells workers to exit once every buffered event has been handed out.
"""

from __future__ import annotations

import threading
from collections import deque
from typing import Deque

from relay_eventlog.application.ports.queue import EventQueuePort


class BoundedEventQueue(EventQueuePort):
    """Fixed-capacity FIFO with a non-blocking put and a closing signal.

    Examples
    --------
    >>> q = BoundedEventQueue(capacity=1)
    >>> q.try_put("first")
    True
    >>> q.try_put("second")
    False
    >>> q.close_for_writes()
    >>> q.get()
    ('first', True)
    >>> q.get()
    (None, False)
    """

    def __init__(self, *, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._items: Deque[str] = deque()
        self._closed = False
        self._lock = threading.Lock()
        self._not_empty = threading.Condition(self._lock)

    @property
    def capacity(self) -> int:
        """Return the maximum number of buffered events."""

        return self._capacity

    @property
    def closed(self) -> bool:
        """Return ``True`` once :meth:`close_for_writes` was called."""

        with self._lock:
            return self._closed

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def try_put(self, event: str) -> bool:
        """Append ``event`` unless the queue is full or closed."""

        with self._not_empty:
            if self._closed or len(self._items) >= self._capacity:
                return False
            self._items.append(event)
            self._not_empty.notify()
            return True

    def get(self) -> tuple[str | None, bool]:
        """Return ``(event, True)`` or ``(None, False)`` once closed and drained."""

        with self._not_empty:
            while not self._items and not self._closed:
                self._not_empty.wait()
            if self._items:
                return self._items.popleft(), True
            return None, False

    def close_for_writes(self) -> None:
        """Refuse new events and wake every waiting consumer.

        Buffered events stay available; consumers see ``ok=False`` only after
        the last one has been taken.
        """

        with self._not_empty:
            self._closed = True
            self._not_empty.notify_all()


__all__ = ["BoundedEventQueue"]
