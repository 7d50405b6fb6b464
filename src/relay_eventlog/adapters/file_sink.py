"""Append-only file sink and the helper that provisions it.

Purpose
-------
Own the single destination file for the lifetime of a running service. Lines
are written verbatim; this layer adds no timestamp or other decoration.

Contents
--------
* :func:`provision_log_file` - create the log directory and open the file.
* :class:`FileSink` - line writer implementing :class:`SinkPort`.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import TextIO

from relay_eventlog.application.ports.sink import SinkPort
from relay_eventlog.errors import ProvisioningError


DEFAULT_LOGS_DIRNAME = "logs"


def provision_log_file(file_name: str, log_dir: str | Path | None = None) -> TextIO:
    """Ensure ``log_dir`` exists and open ``file_name`` inside it for appending.

    Parameters
    ----------
    file_name:
        Name of the destination file, relative to ``log_dir``.
    log_dir:
        Directory holding the file; defaults to ``<cwd>/logs``.

    Returns
    -------
    TextIO
        Line-buffered UTF-8 handle opened in append mode.

    Raises
    ------
    ProvisioningError
        When the directory cannot be created, the path is not a directory, or
        the file cannot be opened. The original :class:`OSError` is chained.

    Examples
    --------
    >>> import tempfile
    >>> with tempfile.TemporaryDirectory() as tmp:
    ...     handle = provision_log_file("app.log", Path(tmp) / "logs")
    ...     handle.close()
    ...     (Path(tmp) / "logs" / "app.log").exists()
    True
    """

    directory = Path(log_dir) if log_dir is not None else Path.cwd() / DEFAULT_LOGS_DIRNAME
    if directory.exists() and not directory.is_dir():
        raise ProvisioningError(f"{directory} is not a directory", path=directory)
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ProvisioningError(f"Failed to create logs directory {directory}: {exc}", path=directory) from exc

    target = directory / file_name
    try:
        return target.open("a", encoding="utf-8", buffering=1)
    except OSError as exc:
        raise ProvisioningError(f"Failed to open log file {target}: {exc}", path=target) from exc


class FileSink(SinkPort):
    """Write one line per event to an already-open text handle.

    Concurrent workers share a sink; a sink-local lock keeps their lines from
    interleaving. The lock is never held by anything but :meth:`write_line`
    and :meth:`close`.
    """

    def __init__(self, handle: TextIO, *, path: Path | None = None) -> None:
        self._handle = handle
        self._path = path
        self._lock = threading.Lock()
        self._closed = False

    @classmethod
    def open(cls, file_name: str, log_dir: str | Path | None = None) -> "FileSink":
        """Provision the destination and wrap it in a sink."""

        handle = provision_log_file(file_name, log_dir)
        return cls(handle, path=Path(handle.name))

    @property
    def path(self) -> Path | None:
        """Return the file path when known."""

        return self._path

    @property
    def closed(self) -> bool:
        return self._closed

    def write_line(self, text: str) -> None:
        """Append ``text`` followed by a newline.

        Raises
        ------
        ValueError
            When the sink was already closed.
        OSError
            When the underlying write fails.
        """

        with self._lock:
            if self._closed:
                raise ValueError("write to closed sink")
            self._handle.write(text + "\n")

    def close(self) -> None:
        """Flush and close the handle; later calls are ignored."""

        with self._lock:
            if self._closed:
                return
            self._closed = True
            try:
                self._handle.flush()
            finally:
                self._handle.close()


__all__ = ["DEFAULT_LOGS_DIRNAME", "FileSink", "provision_log_file"]
