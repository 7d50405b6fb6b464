"""Static package metadata surfaced by the CLI ``info`` command."""

from __future__ import annotations

from typing import Callable

name = "relay_eventlog"
title = "Bounded asynchronous event log for chat relay services"
version = "0.1.0"
homepage = "https://github.com/relay-eventlog/relay_eventlog"
author = "relay_eventlog contributors"
author_email = "maintainers@relay-eventlog.invalid"
shell_command = "relay-eventlog"


def print_info(writer: Callable[[str], None] | None = None) -> None:
    """Emit the metadata banner line by line.

    Examples
    --------
    >>> captured = []
    >>> print_info(writer=captured.append)
    >>> captured[0]
    'Info for relay_eventlog:\\n'
    """

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:\n", "\n"]
    lines.extend(f"    {label.ljust(pad)} = {value}\n" for label, value in fields)

    if writer is None:
        print("".join(lines), end="")
        return
    for line in lines:
        writer(line)


__all__ = [
    "author",
    "author_email",
    "homepage",
    "name",
    "print_info",
    "shell_command",
    "title",
    "version",
]
