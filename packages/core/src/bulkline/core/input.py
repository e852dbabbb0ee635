"""Input adapter: turns raw lines into commands and block boundaries."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from datetime import datetime

from .processor import BatchProcessor
from .schema.command import Command
from .time_utils import utc_now
from .types import DEFAULT_CLOSE_MARKER, DEFAULT_OPEN_MARKER

logger = logging.getLogger("bulkline")


def read_commands(
    lines: Iterable[str],
    clock: Callable[[], datetime] = utc_now,
) -> Iterator[Command]:
    """Yield one command per line, stamped when the line is read."""
    for line in lines:
        yield Command(text=line.rstrip("\r\n"), timestamp=clock())


class BlockInput:
    """Routes commands to a :class:`BatchProcessor`, tracking block depth.

    Only the outermost open marker enters a forced block and only the
    matching close marker leaves it; markers nested in between just move the
    depth counter. A close marker at depth 0 is ignored.
    """

    def __init__(
        self,
        processor: BatchProcessor,
        open_marker: str = DEFAULT_OPEN_MARKER,
        close_marker: str = DEFAULT_CLOSE_MARKER,
    ) -> None:
        self._processor = processor
        self._open_marker = open_marker
        self._close_marker = close_marker
        self._block_depth = 0

    @property
    def block_depth(self) -> int:
        return self._block_depth

    @property
    def processor(self) -> BatchProcessor:
        return self._processor

    def process(self, command: Command) -> None:
        if command.text == self._open_marker:
            self._block_depth += 1
            if self._block_depth == 1:
                self._processor.enter_forced_block()
        elif command.text == self._close_marker:
            if self._block_depth == 0:
                logger.debug("[bulkline] Ignoring unbalanced %r", command.text)
                return
            self._block_depth -= 1
            if self._block_depth == 0:
                self._processor.exit_forced_block()
        else:
            self._processor.accept(command)

    def process_line(self, text: str, timestamp: datetime | None = None) -> None:
        if timestamp is None:
            self.process(Command.now(text))
        else:
            self.process(Command(text=text, timestamp=timestamp))

    def run(self, lines: Iterable[str]) -> int:
        """Feed every line through ``process``; returns the number of lines read."""
        count = 0
        for command in read_commands(lines):
            self.process(command)
            count += 1
        return count
