"""Narrow capability handed to producers (HTTP handlers, database calls, senders)."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class EventRecorder(Protocol):
    """Record an event given a string.

    Implementations never block and never raise, so callers can log from any
    request path without guarding the call.
    """

    def record_event(self, text: str) -> None: ...


__all__ = ["EventRecorder"]
