"""Protocols separating the service façade from its adapters."""

from __future__ import annotations

from .notice import DiagnosticHook, NoticePort
from .queue import EventQueuePort
from .recorder import EventRecorder
from .sink import SinkPort
from .workers import WorkerPoolPort

__all__ = [
    "DiagnosticHook",
    "EventQueuePort",
    "EventRecorder",
    "NoticePort",
    "SinkPort",
    "WorkerPoolPort",
]
