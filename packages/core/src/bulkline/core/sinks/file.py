"""File sink: one log file per flushed batch."""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from ..time_utils import epoch_seconds
from .types import Sink, format_bulk

if TYPE_CHECKING:
    from ..schema.command import Command

logger = logging.getLogger("bulkline")

_DEFAULTS = {
    "directory": ".",
    "latency_ms": 1,
}


class FileSink(Sink):
    """Writes each batch to ``bulk<seconds>.log`` in ``directory``.

    The file name comes from the first command's timestamp, so two batches
    flushed within the same second share a name and the later one wins.
    After each write the sink sleeps ``latency_ms`` to emulate slow storage.
    """

    def __init__(
        self,
        directory: str | Path = _DEFAULTS["directory"],
        latency_ms: float = _DEFAULTS["latency_ms"],
    ) -> None:
        self._directory = Path(directory)
        self._latency_s = latency_ms / 1000

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, batch: Sequence[Command]) -> Path:
        return self._directory / f"bulk{epoch_seconds(batch[0].timestamp)}.log"

    def write_batch(self, batch: Sequence[Command]) -> None:
        path = self.path_for(batch)
        path.write_text(format_bulk(batch), encoding="utf-8")
        logger.debug("[bulkline] Wrote %d command(s) to %s", len(batch), path)
        if self._latency_s > 0:
            time.sleep(self._latency_s)


def create_file_sink(
    directory: str | Path = _DEFAULTS["directory"],
    *,
    latency_ms: float = _DEFAULTS["latency_ms"],
) -> Sink:
    return FileSink(directory=directory, latency_ms=latency_ms)
