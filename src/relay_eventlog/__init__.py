"""Bounded asynchronous event log for chat relay services.

Hosts build one :class:`EventLogService` at their composition root, start it
before serving requests, hand :func:`recorder_for` to producers, and close it
on shutdown. See :mod:`relay_eventlog.runtime` for the wiring helpers.
"""

from __future__ import annotations

from .application.ports import EventRecorder
from .application.service import EventLogService
from .config import EventLogSettings, load_settings
from .domain import DeliveryStats, ServiceState
from .errors import AlreadyStartedError, ProvisioningError, StartError
from .runtime import build_service, recorder_for, shutdown, summary_info

__all__ = [
    "AlreadyStartedError",
    "DeliveryStats",
    "EventLogService",
    "EventLogSettings",
    "EventRecorder",
    "ProvisioningError",
    "ServiceState",
    "StartError",
    "build_service",
    "load_settings",
    "recorder_for",
    "shutdown",
    "summary_info",
]
