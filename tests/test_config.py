from __future__ import annotations

from pathlib import Path

import pytest

from relay_eventlog.config import EventLogSettings, load_settings


def test_defaults_without_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("relay_eventlog.config.default_worker_count", lambda: 4)

    settings = load_settings(environ={})

    assert settings == EventLogSettings(file_name="server.log", log_dir=None, buffer_size=100, worker_count=4, notices=True)


def test_environment_values_are_used() -> None:
    settings = load_settings(
        environ={
            "LOG_FILE_NAME": "bot.log",
            "LOG_DIR": "/var/log/relay",
            "LOG_BUFFER_SIZE": "500",
            "LOG_WORKERS": "3",
            "LOG_NOTICES": "off",
        }
    )

    assert settings.file_name == "bot.log"
    assert settings.log_dir == Path("/var/log/relay")
    assert settings.buffer_size == 500
    assert settings.worker_count == 3
    assert settings.notices is False


def test_explicit_arguments_beat_environment(tmp_path: Path) -> None:
    settings = load_settings(
        file_name="explicit.log",
        log_dir=tmp_path,
        buffer_size=5,
        worker_count=1,
        notices=True,
        environ={"LOG_FILE_NAME": "env.log", "LOG_BUFFER_SIZE": "500", "LOG_WORKERS": "8", "LOG_NOTICES": "0"},
    )

    assert settings == EventLogSettings(file_name="explicit.log", log_dir=tmp_path, buffer_size=5, worker_count=1, notices=True)


def test_blank_environment_values_fall_back_to_defaults() -> None:
    settings = load_settings(environ={"LOG_FILE_NAME": "", "LOG_BUFFER_SIZE": "  ", "LOG_WORKERS": "2"})

    assert settings.file_name == "server.log"
    assert settings.buffer_size == 100


@pytest.mark.parametrize(
    ("key", "value", "message"),
    [
        ("LOG_BUFFER_SIZE", "lots", "LOG_BUFFER_SIZE must be an integer"),
        ("LOG_WORKERS", "2.5", "LOG_WORKERS must be an integer"),
        ("LOG_NOTICES", "maybe", "LOG_NOTICES must be a boolean flag"),
    ],
)
def test_invalid_environment_values_name_the_variable(key: str, value: str, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        load_settings(environ={key: value})


@pytest.mark.parametrize(
    ("kwargs", "message"),
    [
        ({"buffer_size": 0}, "buffer_size must be positive"),
        ({"worker_count": 0}, "worker_count must be positive"),
        ({"file_name": "  "}, "file_name must not be empty"),
    ],
)
def test_settings_validate_values(kwargs: dict[str, object], message: str) -> None:
    with pytest.raises(ValueError, match=message):
        EventLogSettings(**kwargs)  # type: ignore[arg-type]
