"""Command-line interface for exercising the event log service.

Purpose
-------
Let operators append events to a relay log from the shell and measure how the
bounded queue behaves under concurrent producers, without starting the relay.

Contents
--------
* :func:`cli` - root click group (``--traceback``, ``--use-dotenv``).
* ``info`` / ``record`` / ``stress`` subcommands.
* :func:`main` - entry point that runs the group through ``lib_cli_exit_tools``.
"""

from __future__ import annotations

import os
import sys
import threading
import time
from pathlib import Path
from typing import Any, Callable, Iterable, Sequence

import click
import lib_cli_exit_tools

from . import __init__conf__
from . import config as config_module
from .domain import DeliveryStats
from .errors import StartError
from .runtime import build_service, summary_info

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def _sink_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the options shared by commands that start a service."""

    options = [
        click.option("--file-name", default=None, help="Log file name (env LOG_FILE_NAME, default server.log)."),
        click.option(
            "--log-dir",
            type=click.Path(path_type=Path),
            default=None,
            help="Directory for the log file (env LOG_DIR, default ./logs).",
        ),
        click.option("--buffer-size", type=click.IntRange(min=1), default=None, help="Queue capacity (env LOG_BUFFER_SIZE)."),
        click.option("--workers", type=click.IntRange(min=1), default=None, help="Worker threads (env LOG_WORKERS)."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=False,
    help="Load environment variables from a nearby .env before running commands.",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool) -> None:
    """Root command storing global flags and printing the banner by default."""

    explicit: bool | None = None
    if ctx.get_parameter_source("use_dotenv") is not click.core.ParameterSource.DEFAULT:
        explicit = use_dotenv
    if config_module.should_use_dotenv(explicit=explicit, env_value=os.getenv(config_module.DOTENV_ENV_VAR)):
        config_module.enable_dotenv()

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback

    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print resolved metadata so users can inspect installation details."""

    click.echo(summary_info(), nl=False)


@cli.command("record", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("messages", nargs=-1)
@_sink_options
def cli_record(
    messages: tuple[str, ...],
    file_name: str | None,
    log_dir: Path | None,
    buffer_size: int | None,
    workers: int | None,
) -> None:
    """Append MESSAGES (or stdin lines when none are given) to the log file."""

    settings = config_module.load_settings(
        file_name=file_name,
        log_dir=log_dir,
        buffer_size=buffer_size,
        worker_count=workers,
    )
    source: Iterable[str] = messages if messages else _stdin_lines()
    stats = _run_service(settings, lambda record: _record_all(record, source))
    _echo_stats(stats)


@cli.command("stress", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--producers", type=click.IntRange(min=1), default=4, show_default=True, help="Concurrent producer threads.")
@click.option("--events", type=click.IntRange(min=1), default=100, show_default=True, help="Events per producer.")
@_sink_options
def cli_stress(
    producers: int,
    events: int,
    file_name: str | None,
    log_dir: Path | None,
    buffer_size: int | None,
    workers: int | None,
) -> None:
    """Hammer the service from concurrent producers and report what survived."""

    settings = config_module.load_settings(
        file_name=file_name if file_name is not None else "stress.log",
        log_dir=log_dir,
        buffer_size=buffer_size,
        worker_count=workers,
        notices=False,
    )
    begin = time.perf_counter()
    stats = _run_service(settings, lambda record: _run_producers(record, producers=producers, events=events))
    elapsed = time.perf_counter() - begin
    click.echo(f"producers={producers} events_per_producer={events} elapsed={elapsed:.3f}s")
    _echo_stats(stats)


def _run_service(settings: config_module.EventLogSettings, body: Callable[[Callable[[str], None]], None]) -> DeliveryStats:
    service = build_service(settings)
    try:
        service.start()
    except StartError as exc:
        raise click.ClickException(str(exc)) from exc
    try:
        body(service.record_event)
    finally:
        service.close()
    return service.stats()


def _record_all(record: Callable[[str], None], messages: Iterable[str]) -> None:
    for message in messages:
        record(message)


def _stdin_lines() -> Iterable[str]:
    for line in sys.stdin:
        yield line.rstrip("\r\n")


def _run_producers(record: Callable[[str], None], *, producers: int, events: int) -> None:
    gate = threading.Event()

    def produce(producer_id: int) -> None:
        gate.wait()
        for index in range(events):
            record(f"producer-{producer_id} event-{index}")

    threads = [threading.Thread(target=produce, args=(pid,), name=f"stress-producer-{pid}") for pid in range(producers)]
    for thread in threads:
        thread.start()
    gate.set()
    for thread in threads:
        thread.join()


def _echo_stats(stats: DeliveryStats) -> None:
    click.echo(
        f"accepted={stats.accepted} written={stats.written} "
        f"dropped_queue_full={stats.dropped_queue_full} dropped_not_running={stats.dropped_not_running} "
        f"write_failures={stats.write_failures}"
    )


def main(argv: Sequence[str] | None = None, *, restore_traceback: bool = True) -> int:
    """Run the CLI through ``lib_cli_exit_tools`` and return the exit code.

    Traceback preferences changed by ``--traceback`` are restored afterwards
    unless ``restore_traceback`` is ``False``.
    """

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main"]
