"""Errors surfaced synchronously by :meth:`EventLogService.start`.

Only the start path reports failures to its caller; recording and closing are
best-effort and never raise.
"""

from __future__ import annotations

from pathlib import Path


class StartError(RuntimeError):
    """Base class for failures that keep the service from running."""


class AlreadyStartedError(StartError):
    """Raised when ``start`` is called on a service that left ``UNINITIALIZED``."""


class ProvisioningError(StartError):
    """Raised when the log directory or file cannot be prepared.

    The underlying :class:`OSError` is chained as ``__cause__``.
    """

    def __init__(self, message: str, *, path: Path) -> None:
        super().__init__(message)
        self.path = path


__all__ = ["AlreadyStartedError", "ProvisioningError", "StartError"]
