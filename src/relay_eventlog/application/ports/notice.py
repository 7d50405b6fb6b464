"""Fallback channel and diagnostic hook used when events cannot be delivered."""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, runtime_checkable

DiagnosticHook = Optional[Callable[[str, dict[str, Any]], None]]


@runtime_checkable
class NoticePort(Protocol):
    """Always-available output that is not the sink itself."""

    def warn(self, message: str) -> None:
        """Emit a one-line warning."""


__all__ = ["DiagnosticHook", "NoticePort"]
