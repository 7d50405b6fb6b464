"""Configuration resolution for the event log service.

Purpose
-------
Turn keyword arguments, environment variables, and an optional ``.env`` file
into :class:`EventLogSettings`.

Precedence
----------
Explicit arguments win over environment variables, which win over defaults.
A ``.env`` file only fills variables the environment does not already define.

Environment variables
---------------------
``LOG_FILE_NAME``, ``LOG_DIR``, ``LOG_BUFFER_SIZE``, ``LOG_WORKERS``,
``LOG_NOTICES``; ``RELAY_EVENTLOG_USE_DOTENV`` toggles ``.env`` loading for
the CLI.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

from relay_eventlog.application.service import DEFAULT_BUFFER_SIZE, DEFAULT_FILE_NAME, default_worker_count


DOTENV_ENV_VAR = "RELAY_EVENTLOG_USE_DOTENV"
ENV_FILE_NAME = "LOG_FILE_NAME"
ENV_LOG_DIR = "LOG_DIR"
ENV_BUFFER_SIZE = "LOG_BUFFER_SIZE"
ENV_WORKERS = "LOG_WORKERS"
ENV_NOTICES = "LOG_NOTICES"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

_DOTENV_LOADED: Path | None = None


@dataclass(slots=True, frozen=True)
class EventLogSettings:
    """Resolved scalar inputs for one :class:`EventLogService`."""

    file_name: str = DEFAULT_FILE_NAME
    log_dir: Path | None = None
    buffer_size: int = DEFAULT_BUFFER_SIZE
    worker_count: int = 1
    notices: bool = True

    def __post_init__(self) -> None:
        if not self.file_name.strip():
            raise ValueError("file_name must not be empty")
        if self.buffer_size <= 0:
            raise ValueError("buffer_size must be positive")
        if self.worker_count <= 0:
            raise ValueError("worker_count must be positive")


def load_settings(
    *,
    file_name: str | None = None,
    log_dir: str | Path | None = None,
    buffer_size: int | None = None,
    worker_count: int | None = None,
    notices: bool | None = None,
    environ: Mapping[str, str] | None = None,
) -> EventLogSettings:
    """Resolve settings from arguments and the environment.

    Examples
    --------
    >>> load_settings(environ={"LOG_BUFFER_SIZE": "250"}).buffer_size
    250
    >>> load_settings(buffer_size=10, environ={"LOG_BUFFER_SIZE": "250"}).buffer_size
    10
    """

    env = os.environ if environ is None else environ

    resolved_name = file_name if file_name is not None else env.get(ENV_FILE_NAME) or DEFAULT_FILE_NAME
    if log_dir is not None:
        resolved_dir: Path | None = Path(log_dir)
    else:
        env_dir = env.get(ENV_LOG_DIR)
        resolved_dir = Path(env_dir) if env_dir else None
    resolved_buffer = buffer_size if buffer_size is not None else _env_int(env, ENV_BUFFER_SIZE, DEFAULT_BUFFER_SIZE)
    resolved_workers = worker_count if worker_count is not None else _env_int(env, ENV_WORKERS, default_worker_count())
    resolved_notices = notices if notices is not None else _env_flag(env, ENV_NOTICES, True)

    return EventLogSettings(
        file_name=resolved_name,
        log_dir=resolved_dir,
        buffer_size=resolved_buffer,
        worker_count=resolved_workers,
        notices=resolved_notices,
    )


def _env_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from exc


def _env_flag(env: Mapping[str, str], key: str, default: bool) -> bool:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{key} must be a boolean flag, got {raw!r}")


def should_use_dotenv(*, explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Decide whether ``.env`` should be loaded; an explicit flag wins.

    Examples
    --------
    >>> should_use_dotenv(explicit=None, env_value="yes")
    True
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    """

    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    return env_value.strip().lower() in _TRUTHY


def enable_dotenv(*, search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` without overriding existing variables.

    The search walks upwards from ``search_from`` (default: the working
    directory). Returns the resolved path that was loaded, or ``None`` when no
    file was found. Loading happens at most once per process.
    """

    global _DOTENV_LOADED
    if _DOTENV_LOADED is not None:
        return _DOTENV_LOADED

    if search_from is not None:
        candidate = _find_upwards(search_from)
    else:
        found = find_dotenv(usecwd=True)
        candidate = Path(found) if found else None
    if candidate is None:
        return None

    resolved = candidate.resolve()
    load_dotenv(resolved, override=False)
    _DOTENV_LOADED = resolved
    return resolved


def _find_upwards(start: Path) -> Path | None:
    for directory in (start.resolve(), *start.resolve().parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


def _reset_dotenv_state_for_testing() -> None:
    """Forget which ``.env`` file was loaded."""

    global _DOTENV_LOADED
    _DOTENV_LOADED = None


__all__ = [
    "DOTENV_ENV_VAR",
    "ENV_BUFFER_SIZE",
    "ENV_FILE_NAME",
    "ENV_LOG_DIR",
    "ENV_NOTICES",
    "ENV_WORKERS",
    "EventLogSettings",
    "enable_dotenv",
    "load_settings",
    "should_use_dotenv",
]
