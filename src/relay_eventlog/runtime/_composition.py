"""Composition helpers wiring settings, adapters, and the service façade.

Purpose
-------
Translate :class:`EventLogSettings` into a ready-to-start
:class:`EventLogService`. This is the only place that knows which concrete
queue, sink, worker pool, and notice adapters back the service.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from relay_eventlog.adapters import (
    BoundedEventQueue,
    FileSink,
    RichNoticeAdapter,
    SilentNoticeAdapter,
    WorkerPool,
)
from relay_eventlog.application.ports import DiagnosticHook, EventQueuePort, NoticePort, SinkPort, WorkerPoolPort
from relay_eventlog.application.service import EventLogService
from relay_eventlog.config import EventLogSettings, load_settings


def build_service(
    settings: EventLogSettings | None = None,
    *,
    notices: NoticePort | None = None,
    diagnostic: DiagnosticHook = None,
    **overrides: Any,
) -> EventLogService:
    """Assemble an unstarted service from ``settings`` (or the environment).

    Parameters
    ----------
    settings:
        Pre-resolved settings; when ``None`` they are loaded through
        :func:`load_settings` using ``overrides`` as explicit arguments.
    notices:
        Fallback channel for drop notices; defaults to Rich on stderr, or a
        silent adapter when ``settings.notices`` is ``False``.
    diagnostic:
        Optional ``(name, payload)`` hook receiving ``event_dropped`` and
        ``sink_write_failed`` reports.
    """

    if settings is None:
        settings = load_settings(**overrides)
    elif overrides:
        raise TypeError("pass either settings or keyword overrides, not both")

    return EventLogService(
        sink_factory=_create_sink,
        queue_factory=_create_queue,
        pool_factory=_create_pool,
        notices=notices if notices is not None else _create_notices(settings),
        file_name=settings.file_name,
        log_dir=settings.log_dir,
        buffer_size=settings.buffer_size,
        worker_count=settings.worker_count,
        diagnostic=diagnostic,
    )


def _create_sink(file_name: str, log_dir: Path | None) -> SinkPort:
    return FileSink.open(file_name, log_dir)


def _create_queue(capacity: int) -> EventQueuePort:
    return BoundedEventQueue(capacity=capacity)


def _create_pool(**kwargs: Any) -> WorkerPoolPort:
    return WorkerPool(**kwargs)


def _create_notices(settings: EventLogSettings) -> NoticePort:
    if not settings.notices:
        return SilentNoticeAdapter()
    return RichNoticeAdapter()


__all__ = ["build_service"]
