"""Console sink."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import TYPE_CHECKING, TextIO

from .types import Sink, format_bulk

if TYPE_CHECKING:
    from ..schema.command import Command


class ConsoleSink(Sink):
    """Writes each batch as one line to stdout."""

    def __init__(self, stream: TextIO | None = None) -> None:
        # Resolved lazily so a redirected sys.stdout is honoured.
        self._stream = stream

    def write_batch(self, batch: Sequence[Command]) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        print(format_bulk(batch), file=stream, flush=True)


def create_console_sink(stream: TextIO | None = None) -> Sink:
    return ConsoleSink(stream=stream)
