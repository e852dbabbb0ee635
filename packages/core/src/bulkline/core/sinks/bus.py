"""SinkBus — ordered fan-out of batches to registered sinks."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from .types import Sink

if TYPE_CHECKING:
    from ..schema.command import Command

logger = logging.getLogger("bulkline")


class SinkBus:
    """Fans out batches to multiple sinks in registration order.

    Each call iterates over a snapshot of the sink list, so sinks added or
    removed while a batch is being delivered only take part in later calls.
    Sink errors are logged and re-raised: a batch that cannot be written is
    never dropped silently.
    """

    def __init__(self) -> None:
        self._sinks: list[Sink] = []
        self._closed = False

    def __len__(self) -> int:
        return len(self._sinks)

    @property
    def sinks(self) -> tuple[Sink, ...]:
        return tuple(self._sinks)

    def add(self, *sinks: Sink) -> None:
        self._sinks.extend(sinks)

    def remove(self, sink: Sink) -> None:
        if sink in self._sinks:
            self._sinks.remove(sink)

    def preview(self, batch: Sequence[Command]) -> None:
        """Let every sink observe the in-progress batch."""
        for sink in tuple(self._sinks):
            sink.update(batch)

    def emit(self, batch: Sequence[Command]) -> None:
        for sink in tuple(self._sinks):
            try:
                sink.write_batch(batch)
            except Exception as exc:
                logger.error("[bulkline] Sink error in %s: %s", type(sink).__name__, exc)
                raise

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        for sink in tuple(self._sinks):
            try:
                sink.close()
            except Exception as exc:
                logger.error("[bulkline] Sink close error in %s: %s", type(sink).__name__, exc)
                raise
