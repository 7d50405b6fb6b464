"""Composition root helpers for hosts that own an :class:`EventLogService`.

Purpose
-------
Give the process entry point (a web server, a CLI command) one place to build
the service, hand its :class:`EventRecorder` capability to producers, and tear
it down on exit.

Contents
--------
* ``build_service`` - wire settings and adapters into a service.
* ``shutdown`` - close with an optional external deadline.
* ``recorder_for`` - narrow a service down to the producer capability.
* ``summary_info`` - metadata banner shared by the CLI and docs.

System Role
-----------
There is no process-wide singleton: the host keeps the service it built and
passes the recorder to whoever needs it.
"""

from __future__ import annotations

import logging
import threading

from relay_eventlog.application.ports import EventRecorder
from relay_eventlog.application.service import EventLogService

from ._composition import build_service


LOGGER = logging.getLogger(__name__)


def recorder_for(service: EventLogService) -> EventRecorder:
    """Return the narrow ``record_event`` capability for producers.

    Producers holding the result cannot start or close the service.

    Examples
    --------
    >>> from relay_eventlog.adapters import SilentNoticeAdapter
    >>> recorder = recorder_for(build_service(worker_count=1, notices=SilentNoticeAdapter()))
    >>> hasattr(recorder, "close")
    False
    >>> recorder.record_event("dropped quietly before start")
    """

    return _Recorder(service)


class _Recorder(EventRecorder):
    __slots__ = ("_record",)

    def __init__(self, service: EventLogService) -> None:
        self._record = service.record_event

    def record_event(self, text: str) -> None:
        self._record(text)


def shutdown(service: EventLogService, *, timeout: float | None = None) -> bool:
    """Close ``service``, optionally giving up waiting after ``timeout`` seconds.

    Why
    ---
    ``close`` itself has no deadline. Hosts that must exit within a bounded
    time run it through this helper; a timeout means the drain may be
    incomplete and the process should proceed with exit anyway.

    Returns
    -------
    bool
        ``True`` when ``close`` finished, ``False`` when the deadline elapsed.
    """

    if timeout is None:
        service.close()
        return True

    closer = threading.Thread(target=service.close, name="relay-eventlog-shutdown", daemon=True)
    closer.start()
    closer.join(timeout)
    if closer.is_alive():
        LOGGER.warning("Event log drain did not finish within %.2fs; pending events may be lost", timeout)
        return False
    return True


def summary_info() -> str:
    """Return the metadata banner used by the CLI ``info`` command.

    Outputs
    -------
    str
        Multi-line banner ending with a newline.
    """

    from .. import __init__conf__

    lines: list[str] = []

    def _capture(text: str) -> None:
        lines.append(text)

    __init__conf__.print_info(writer=_capture)
    return "".join(lines)


__all__ = [
    "build_service",
    "recorder_for",
    "shutdown",
    "summary_info",
]
