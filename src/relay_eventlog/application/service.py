"""Asynchronous event log service: the façade producers and the host talk to.

Purpose
-------
Accept fire-and-forget event strings from any number of threads, buffer them
in a bounded queue, and let a fixed worker pool append them to one file.
Shutdown drains every event accepted before ``close`` was called.

Contents
--------
* :class:`EventLogService` - ``start`` / ``record_event`` / ``close``.
* Factory type aliases used by the composition root to inject adapters.

System Role
-----------
Producers (HTTP handlers, the database layer, outbound senders) only see the
:class:`EventRecorder` capability. The composition root in
:mod:`relay_eventlog.runtime` owns the instance and drives its lifecycle.

Locking
-------
One lock guards ``state``, the queue handle, and the sink handle. It is held
for state reads and transitions only, never across ``WorkerPool.wait`` or a
sink write, so workers can drain while ``close`` waits.
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from types import TracebackType
from typing import Any, Callable, Optional

from relay_eventlog.application.ports import (
    DiagnosticHook,
    EventQueuePort,
    EventRecorder,
    NoticePort,
    SinkPort,
    WorkerPoolPort,
)
from relay_eventlog.domain import DeliveryCounters, DeliveryStats, DropReason, ServiceState
from relay_eventlog.errors import AlreadyStartedError, ProvisioningError


LOGGER = logging.getLogger(__name__)

SinkFactory = Callable[[str, Optional[Path]], SinkPort]
QueueFactory = Callable[[int], EventQueuePort]
PoolFactory = Callable[..., WorkerPoolPort]

DEFAULT_FILE_NAME = "server.log"
DEFAULT_BUFFER_SIZE = 100

NOTICE_NOT_STARTED = "logger not started, dropping event"
NOTICE_CLOSED = "logger closed, dropping event"
NOTICE_QUEUE_FULL = "event queue is full, dropping event"


def default_worker_count() -> int:
    """Return the host's available parallelism, at least one."""

    return os.cpu_count() or 1


class EventLogService(EventRecorder):
    """Bounded, backpressure-aware event log with a fixed worker pool.

    Examples
    --------
    >>> import tempfile
    >>> from relay_eventlog.runtime import build_service
    >>> with tempfile.TemporaryDirectory() as tmp:
    ...     service = build_service(log_dir=tmp, file_name="doc.log", worker_count=1)
    ...     service.start()
    ...     service.record_event("hello")
    ...     service.close()
    ...     (Path(tmp) / "doc.log").read_text()
    'hello\\n'
    """

    def __init__(
        self,
        *,
        sink_factory: SinkFactory,
        queue_factory: QueueFactory,
        pool_factory: PoolFactory,
        notices: NoticePort,
        file_name: str = DEFAULT_FILE_NAME,
        log_dir: str | Path | None = None,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        worker_count: int | None = None,
        diagnostic: DiagnosticHook = None,
    ) -> None:
        if buffer_size <= 0:
            raise ValueError("buffer_size must be positive")
        resolved_workers = worker_count if worker_count is not None else default_worker_count()
        if resolved_workers <= 0:
            raise ValueError("worker_count must be positive")
        self._sink_factory = sink_factory
        self._queue_factory = queue_factory
        self._pool_factory = pool_factory
        self._notices = notices
        self._file_name = file_name
        self._log_dir = Path(log_dir) if log_dir is not None else None
        self._buffer_size = buffer_size
        self._worker_count = resolved_workers
        self._diagnostic = diagnostic
        self._counters = DeliveryCounters()

        self._lock = threading.Lock()
        self._state = ServiceState.UNINITIALIZED
        self._queue: EventQueuePort | None = None
        self._sink: SinkPort | None = None
        self._pool: WorkerPoolPort | None = None

    @property
    def state(self) -> ServiceState:
        with self._lock:
            return self._state

    @property
    def running(self) -> bool:
        return self.state.accepts_events

    @property
    def buffer_size(self) -> int:
        return self._buffer_size

    @property
    def worker_count(self) -> int:
        return self._worker_count

    def stats(self) -> DeliveryStats:
        """Return a snapshot of accepted, written, and dropped counts."""

        return self._counters.snapshot()

    def start(self, file_name: str | None = None) -> None:
        """Provision the sink, allocate the queue, and launch the workers.

        Parameters
        ----------
        file_name:
            Optional override for the destination name configured at
            construction time.

        Raises
        ------
        AlreadyStartedError
            When the service already left ``UNINITIALIZED``.
        ProvisioningError
            When the directory or file cannot be prepared. The state is left
            unchanged and nothing is retried.
        """

        with self._lock:
            if self._state is not ServiceState.UNINITIALIZED:
                raise AlreadyStartedError(f"event log service cannot start from state {self._state.value!r}")

            name = file_name if file_name is not None else self._file_name
            try:
                sink = self._sink_factory(name, self._log_dir)
            except OSError as exc:
                target = (self._log_dir or Path.cwd()) / name
                raise ProvisioningError(f"Failed to provision log file {target}: {exc}", path=target) from exc

            queue = self._queue_factory(self._buffer_size)
            pool = self._pool_factory(
                queue=queue,
                sink=sink,
                worker_count=self._worker_count,
                counters=self._counters,
                diagnostic=self._diagnostic,
            )
            try:
                pool.start()
            except BaseException:
                queue.close_for_writes()
                sink.close()
                raise

            self._sink = sink
            self._queue = queue
            self._pool = pool
            self._state = ServiceState.RUNNING
        LOGGER.debug("Event log service started with %d workers, buffer %d", self._worker_count, self._buffer_size)

    def record_event(self, text: str) -> None:
        """Hand ``text`` to the workers without blocking; never raises.

        When the service is not running, or the queue is full, the event is
        dropped and a one-line notice goes to the fallback channel.
        """

        try:
            with self._lock:
                state = self._state
                queue = self._queue
            if not state.accepts_events or queue is None:
                notice = NOTICE_NOT_STARTED if state is ServiceState.UNINITIALIZED else NOTICE_CLOSED
                self._drop(DropReason.NOT_RUNNING, notice)
                return
            if queue.try_put(text):
                self._counters.note_accepted()
                return
            # close() may have sealed the queue after the state read
            if queue.closed:
                self._drop(DropReason.NOT_RUNNING, NOTICE_CLOSED)
            else:
                self._drop(DropReason.QUEUE_FULL, NOTICE_QUEUE_FULL)
        except Exception as exc:  # noqa: BLE001
            LOGGER.error("Event log service failed to record an event; continuing", exc_info=exc)

    def close(self) -> None:
        """Stop accepting events, wait for the workers to drain, close the sink.

        A no-op unless the service is running; a second call neither blocks nor
        raises.
        """

        with self._lock:
            if self._state is not ServiceState.RUNNING:
                return
            self._state = ServiceState.CLOSED
            queue = self._queue
            pool = self._pool
            sink = self._sink
            if queue is not None:
                queue.close_for_writes()

        if pool is not None:
            pool.wait()

        with self._lock:
            self._queue = None
            self._pool = None
            self._sink = None
        if sink is not None:
            try:
                sink.close()
            except Exception as exc:  # noqa: BLE001
                LOGGER.error("Event log sink failed to close cleanly", exc_info=exc)
        LOGGER.debug("Event log service closed: %s", self._counters.snapshot())

    def __enter__(self) -> "EventLogService":
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _drop(self, reason: DropReason, notice: str) -> None:
        self._counters.note_dropped(reason)
        try:
            self._notices.warn(notice)
        except Exception as exc:  # noqa: BLE001
            LOGGER.error("Event log notice channel raised; continuing", exc_info=exc)
        self._emit_diagnostic("event_dropped", {"reason": reason.value})

    def _emit_diagnostic(self, name: str, payload: dict[str, Any]) -> None:
        if self._diagnostic is None:
            return
        try:
            self._diagnostic(name, payload)
        except Exception as diagnostic_exc:  # noqa: BLE001
            LOGGER.error("Event log diagnostic hook raised while reporting %s", name, exc_info=diagnostic_exc)


__all__ = [
    "DEFAULT_BUFFER_SIZE",
    "DEFAULT_FILE_NAME",
    "EventLogService",
    "PoolFactory",
    "QueueFactory",
    "SinkFactory",
    "default_worker_count",
]
