"""Domain values shared by the event log service."""

from __future__ import annotations

from .state import ServiceState
from .stats import DeliveryStats, DeliveryCounters, DropReason

__all__ = [
    "DeliveryCounters",
    "DeliveryStats",
    "DropReason",
    "ServiceState",
]
