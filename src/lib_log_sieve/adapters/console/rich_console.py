"""Rich-powered console sink implementing :class:`SinkPort`.

Purpose
-------
Render flushed entries on a terminal with per-level styling so developers can
watch the decision engine at work.

Contents
--------
* :data:`_STYLE_MAP` - default level-to-style mapping.
* :class:`RichConsoleSink` - sink constructed by :func:`lib_log_sieve.create_logger`.

System Role
-----------
Human-facing sink; honours colour overrides and optional ``str.format``
templates built on :func:`build_format_payload`.
"""

from __future__ import annotations

from typing import Mapping

from rich.console import Console

from lib_log_sieve.application.ports.sink import SinkPort
from lib_log_sieve.domain.entry import LogEntry
from lib_log_sieve.domain.levels import LogLevel

from .._formatting import DEFAULT_TEMPLATE, build_format_payload
from .._stack import StackCaptureMixin


_STYLE_MAP: Mapping[LogLevel, str] = {
    LogLevel.ERROR: "bold red",
    LogLevel.WARNING: "yellow",
    LogLevel.INFO: "cyan",
    LogLevel.DEBUG: "dim",
    LogLevel.FINE: "dim",
    LogLevel.FINER: "dim",
    LogLevel.FINEST: "dim",
}

#: Default Rich styles keyed by :class:`LogLevel`.


class RichConsoleSink(StackCaptureMixin, SinkPort):
    """Print entries with Rich when the logger flushes."""

    def __init__(
        self,
        *,
        console: Console | None = None,
        force_color: bool = False,
        no_color: bool = False,
        styles: Mapping[LogLevel | str, str] | None = None,
        template: str | None = None,
        show_details: bool = False,
    ) -> None:
        """Configure the sink with colour, style and layout overrides."""
        if console is not None:
            self._console = console
        else:
            self._console = Console(force_terminal=force_color or None, no_color=no_color)
        self._no_color = no_color
        merged = dict(_STYLE_MAP)
        for key, value in (styles or {}).items():
            level = LogLevel.from_name(key) if isinstance(key, str) else key
            merged[level] = value
        self._style_map = merged
        self._template = template or DEFAULT_TEMPLATE
        self._show_details = show_details
        self._pending: list[LogEntry] = []

    def add(self, entry: LogEntry) -> None:
        self._pending.append(entry)

    def flush(self) -> None:
        """Render pending entries in order and forget them.

        Examples
        --------
        >>> from io import StringIO
        >>> from lib_log_sieve.domain import Category, LogEntry
        >>> console = Console(file=StringIO(), record=True, width=200)
        >>> sink = RichConsoleSink(console=console)
        >>> sink.add(LogEntry(Category.EVENT, 'Audit', 'Billing', summary='invoice sent'))
        >>> sink.flush()
        >>> 'invoice sent' in console.export_text()
        True
        """
        pending, self._pending = self._pending, []
        for entry in pending:
            style = "" if self._no_color else self._style_map.get(entry.level, "")
            self._console.print(self.format_line(entry), style=style, highlight=False, markup=False)
            if self._show_details and entry.details:
                self._console.print(entry.details, style="dim", highlight=False, markup=False)

    def format_line(self, entry: LogEntry) -> str:
        """Return the rendered line for ``entry`` using the configured template."""

        return self._template.format(**build_format_payload(entry))


__all__ = ["RichConsoleSink"]
