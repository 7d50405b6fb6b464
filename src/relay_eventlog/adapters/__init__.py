"""Concrete adapters for the queue, sink, worker pool, and fallback channel."""

from __future__ import annotations

from .console.rich_notice import RichNoticeAdapter, SilentNoticeAdapter
from .file_sink import FileSink, provision_log_file
from .queue import BoundedEventQueue
from .worker_pool import CompletionBarrier, WorkerPool

__all__ = [
    "BoundedEventQueue",
    "CompletionBarrier",
    "FileSink",
    "RichNoticeAdapter",
    "SilentNoticeAdapter",
    "WorkerPool",
    "provision_log_file",
]
