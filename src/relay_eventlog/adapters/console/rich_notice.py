"""Rich-powered fallback channel implementing :class:`NoticePort`.

Drop notices cannot go to the sink (it may not exist, or it is the thing that
is backed up), so they are printed to stderr instead.
"""

from __future__ import annotations

from rich.console import Console

from relay_eventlog.application.ports.notice import NoticePort


class RichNoticeAdapter(NoticePort):
    """Print one-line warnings through a Rich console bound to stderr."""

    def __init__(
        self,
        *,
        console: Console | None = None,
        force_color: bool = False,
        no_color: bool = False,
        style: str = "yellow",
    ) -> None:
        if console is not None:
            self._console = console
        else:
            self._console = Console(stderr=True, force_terminal=force_color or None, no_color=no_color)
        self._style = "" if no_color else style

    def warn(self, message: str) -> None:
        """Print ``WARNING: <message>``.

        Examples
        --------
        >>> from io import StringIO
        >>> console = Console(file=StringIO(), record=True)
        >>> RichNoticeAdapter(console=console).warn("log queue is full")
        >>> 'WARNING: log queue is full' in console.export_text()
        True
        """
        self._console.print(f"WARNING: {message}", style=self._style, markup=False, highlight=False)


class SilentNoticeAdapter(NoticePort):
    """Discard notices; used when ``LOG_NOTICES`` is switched off."""

    def warn(self, message: str) -> None:  # noqa: ARG002
        return None


__all__ = ["RichNoticeAdapter", "SilentNoticeAdapter"]
