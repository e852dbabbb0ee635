"""Batching engine: accumulates commands into bulks and flushes them to sinks."""

from __future__ import annotations

import logging
from types import TracebackType

from .schema.command import Command
from .sinks.bus import SinkBus
from .sinks.types import Sink
from .types import parse_bulk_size

logger = logging.getLogger("bulkline")


class ProcessorClosedError(RuntimeError):
    """Raised when a command arrives after ``shutdown()``."""


class DeliveryFailedError(ProcessorClosedError):
    """Raised for input that arrives after a sink failed to write a batch."""


class BatchProcessor:
    """Batching engine.

    Two states: idle, where a batch is flushed as soon as it holds
    ``bulk_size`` commands, and forced, where size-based flushing is
    suspended until the block is closed. Entering and leaving a forced block
    both flush whatever is pending.

    The processor only ever sees one enter/exit pair per top-level block;
    nesting is resolved by :class:`~bulkline.core.input.BlockInput`.

    Use it as a context manager (or call ``shutdown()``) so the last partial
    batch is delivered.
    """

    def __init__(self, bulk_size: int, sinks: list[Sink] | None = None) -> None:
        self._bulk_size = parse_bulk_size(bulk_size)
        self._bus = SinkBus()
        self._commands: list[Command] = []
        self._block_forced = False
        self._flush_count = 0
        self._delivery_failed = False
        self._closed = False
        if sinks:
            self._bus.add(*sinks)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def bulk_size(self) -> int:
        return self._bulk_size

    @property
    def batch(self) -> tuple[Command, ...]:
        return tuple(self._commands)

    @property
    def block_forced(self) -> bool:
        return self._block_forced

    @property
    def flush_count(self) -> int:
        """Number of batches delivered to the sinks so far."""
        return self._flush_count

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def sinks(self) -> tuple[Sink, ...]:
        return self._bus.sinks

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------

    def subscribe(self, sink: Sink) -> None:
        self._bus.add(sink)

    def unsubscribe(self, sink: Sink) -> None:
        self._bus.remove(sink)

    # ------------------------------------------------------------------
    # Commands and blocks
    # ------------------------------------------------------------------

    def accept(self, command: Command) -> None:
        self._ensure_open(command.text)
        self._commands.append(command)
        self._bus.preview(tuple(self._commands))

        if not self._block_forced and len(self._commands) >= self._bulk_size:
            self._flush()

    def enter_forced_block(self) -> None:
        self._ensure_open("block start")
        self._flush()
        self._block_forced = True
        logger.debug("[bulkline] Entered forced block")

    def exit_forced_block(self) -> None:
        self._ensure_open("block end")
        self._flush()
        self._block_forced = False
        logger.debug("[bulkline] Left forced block")

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    def shutdown(self) -> None:
        """Flush the pending batch unless inside a block, then close the sinks.

        An unterminated forced block yields no output: its content is dropped.
        """
        if self._closed:
            return
        self._closed = True
        try:
            if self._delivery_failed:
                logger.warning(
                    "[bulkline] Skipping final flush after a failed delivery (%d pending)",
                    len(self._commands),
                )
            elif self._block_forced:
                if self._commands:
                    logger.debug(
                        "[bulkline] Discarding %d command(s) of an unterminated block",
                        len(self._commands),
                    )
                self._commands.clear()
            else:
                self._flush()
        finally:
            self._bus.close()

    def __enter__(self) -> BatchProcessor:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.shutdown()

    # ------------------------------------------------------------------
    # Private
    # ------------------------------------------------------------------

    def _ensure_open(self, what: str) -> None:
        # A failed delivery leaves the batch pending; never hand it out twice.
        if self._delivery_failed:
            raise DeliveryFailedError(f"A sink failed earlier; dropped {what!r}")
        if self._closed:
            raise ProcessorClosedError(f"Processor is shut down; dropped {what!r}")

    def _flush(self) -> None:
        if not self._commands:
            return
        batch = tuple(self._commands)
        logger.debug(
            "[bulkline] Flushing %d command(s) to %d sink(s)", len(batch), len(self._bus)
        )
        try:
            self._bus.emit(batch)
        except Exception:
            self._delivery_failed = True
            raise
        self._flush_count += 1
        self._commands.clear()
