"""Newline-delimited JSON sink.

Purpose
-------
Persist delivered entries to a file, one JSON document per line, so they can
be inspected or shipped by other tooling.

System Role
-----------
Default durable sink selected by ``LOG_SIEVE_SINK=jsonl``. Entries are held
until :meth:`JsonLinesSink.flush`, which appends them in one pass; IO errors
propagate to the caller of ``BufferedLogger.flush``.
"""

from __future__ import annotations

import json
from pathlib import Path

from lib_log_sieve.application.ports.sink import SinkPort
from lib_log_sieve.domain.entry import LogEntry

from ._stack import StackCaptureMixin


class JsonLinesSink(StackCaptureMixin, SinkPort):
    """Append entries to ``path`` as sorted-key JSON lines."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        self._pending: list[LogEntry] = []

    @property
    def path(self) -> Path:
        return self._path

    def add(self, entry: LogEntry) -> None:
        self._pending.append(entry)

    def flush(self) -> None:
        """Append pending entries to the file; an empty flush only ensures the file exists.

        Pending entries are taken before any IO, so a failed write never
        replays them when the caller hands the same entries in again.
        """
        pending, self._pending = self._pending, []
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("a", encoding="utf-8") as fh:
            for entry in pending:
                fh.write(json.dumps(entry.to_dict(), sort_keys=True, default=str))
                fh.write("\n")


def read_json_lines(path: Path | str) -> list[dict]:
    """Return the decoded documents stored in ``path`` (blank lines skipped)."""

    documents: list[dict] = []
    with Path(path).open("r", encoding="utf-8") as fh:
        for line in fh:
            if not line.strip():
                continue
            documents.append(json.loads(line))
    return documents


__all__ = ["JsonLinesSink", "read_json_lines"]
