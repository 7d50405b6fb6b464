"""Port for the single append-only destination of log lines."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class SinkPort(Protocol):
    """Line-oriented writable destination owned by the service."""

    def write_line(self, text: str) -> None:
        """Append ``text`` as one line."""

    def close(self) -> None:
        """Flush and release the destination."""


__all__ = ["SinkPort"]
