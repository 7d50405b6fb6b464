"""Fixed pool of threads draining the event queue into the sink.

Purpose
-------
Move accepted events from :class:`BoundedEventQueue` to the sink off the
producers' threads, and let shutdown wait until every buffered event has been
written.

Contents
--------
* :class:`CompletionBarrier` - counter of outstanding workers.
* :class:`WorkerPool` - starts ``worker_count`` threads and joins them through
  the barrier.

System Role
-----------
Started by :meth:`EventLogService.start`; :meth:`EventLogService.close` closes
the queue and then blocks on :meth:`WorkerPool.wait`. Workers never touch the
service's state lock, so a close in progress cannot starve the drain.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from relay_eventlog.application.ports.notice import DiagnosticHook
from relay_eventlog.application.ports.queue import EventQueuePort
from relay_eventlog.application.ports.sink import SinkPort
from relay_eventlog.domain.stats import DeliveryCounters


LOGGER = logging.getLogger(__name__)


class CompletionBarrier:
    """Block waiters until the outstanding-worker count reaches zero.

    Examples
    --------
    >>> barrier = CompletionBarrier()
    >>> barrier.add(2)
    >>> barrier.done(); barrier.done()
    >>> barrier.wait(timeout=0)
    True
    """

    def __init__(self) -> None:
        self._count = 0
        self._cond = threading.Condition()

    @property
    def outstanding(self) -> int:
        with self._cond:
            return self._count

    def add(self, count: int = 1) -> None:
        with self._cond:
            self._count += count

    def done(self) -> None:
        with self._cond:
            if self._count <= 0:
                raise RuntimeError("CompletionBarrier.done() called more often than add()")
            self._count -= 1
            if self._count == 0:
                self._cond.notify_all()

    def wait(self, timeout: float | None = None) -> bool:
        """Return ``True`` once the count is zero, ``False`` on timeout."""

        with self._cond:
            return self._cond.wait_for(lambda: self._count == 0, timeout=timeout)


class WorkerPool:
    """Drain ``queue`` into ``sink`` on ``worker_count`` daemon threads."""

    def __init__(
        self,
        *,
        queue: EventQueuePort,
        sink: SinkPort,
        worker_count: int,
        counters: DeliveryCounters | None = None,
        diagnostic: DiagnosticHook = None,
    ) -> None:
        if worker_count <= 0:
            raise ValueError("worker_count must be positive")
        self._queue = queue
        self._sink = sink
        self._worker_count = worker_count
        self._counters = counters if counters is not None else DeliveryCounters()
        self._diagnostic = diagnostic
        self._barrier = CompletionBarrier()
        self._threads: list[threading.Thread] = []

    @property
    def worker_count(self) -> int:
        return self._worker_count

    @property
    def alive(self) -> int:
        """Return the number of workers that have not exited yet."""

        return self._barrier.outstanding

    def start(self) -> None:
        """Spawn the workers; calling twice is an error."""

        if self._threads:
            raise RuntimeError("WorkerPool already started")
        self._barrier.add(self._worker_count)
        for index in range(1, self._worker_count + 1):
            thread = threading.Thread(
                target=self._run,
                name=f"relay-eventlog-worker-{index}",
                daemon=True,
            )
            self._threads.append(thread)
            thread.start()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until every worker saw the queue closed and drained."""

        return self._barrier.wait(timeout)

    def _run(self) -> None:
        """Worker loop: dequeue, write, repeat until closed and empty."""
        try:
            while True:
                event, ok = self._queue.get()
                if not ok:
                    return
                self._write(event or "")
        finally:
            self._barrier.done()

    def _write(self, event: str) -> None:
        try:
            self._sink.write_line(event)
        except Exception as exc:  # noqa: BLE001
            self._counters.note_write_failure()
            LOGGER.error("Event log worker failed to write to sink; event lost", exc_info=exc)
            self._emit_diagnostic("sink_write_failed", {"exception": repr(exc), "length": len(event)})
        else:
            self._counters.note_written()

    def _emit_diagnostic(self, name: str, payload: dict[str, Any]) -> None:
        if self._diagnostic is None:
            return
        try:
            self._diagnostic(name, payload)
        except Exception as diagnostic_exc:  # noqa: BLE001
            LOGGER.error("Event log diagnostic hook raised while reporting %s", name, exc_info=diagnostic_exc)


__all__ = ["CompletionBarrier", "WorkerPool"]
