"""Wires a processor, its sinks and the block-aware input together."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from datetime import datetime
from types import TracebackType
from typing import TextIO

from .input import BlockInput
from .processor import BatchProcessor
from .sinks.console import create_console_sink
from .sinks.file import create_file_sink
from .sinks.types import Sink
from .types import BulkConfig, SinkConfig

logger = logging.getLogger("bulkline")


class BulkPipeline:
    """Input → processor → sinks, with deterministic shutdown.

    Build one with :meth:`from_config` and use it as a context manager so the
    final partial batch is flushed on every exit path.
    """

    def __init__(self, config: BulkConfig, sinks: list[Sink] | None = None) -> None:
        self._config = config
        self._processor = BatchProcessor(config.bulk_size)
        for sink in sinks if sinks is not None else _build_sinks(config.sinks):
            self._processor.subscribe(sink)
        self._input = BlockInput(
            self._processor,
            open_marker=config.open_marker,
            close_marker=config.close_marker,
        )

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @classmethod
    def from_config(cls, config: BulkConfig) -> BulkPipeline:
        return cls(config)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def config(self) -> BulkConfig:
        return self._config

    @property
    def processor(self) -> BatchProcessor:
        return self._processor

    @property
    def input(self) -> BlockInput:
        return self._input

    # ------------------------------------------------------------------
    # Feeding
    # ------------------------------------------------------------------

    def feed(self, text: str, timestamp: datetime | None = None) -> None:
        self._input.process_line(text, timestamp)

    def run(self, lines: Iterable[str]) -> int:
        count = self._input.run(lines)
        logger.debug(
            "[bulkline] End of input after %d line(s), %d bulk(s) flushed",
            count,
            self._processor.flush_count,
        )
        return count

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    def close(self) -> None:
        self._processor.shutdown()

    def __enter__(self) -> BulkPipeline:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def _build_sinks(configs: list[SinkConfig]) -> list[Sink]:
    sinks: list[Sink] = []
    for sink_cfg in configs:
        if sink_cfg.type == "console":
            sinks.append(create_console_sink())
        elif sink_cfg.type == "file":
            sinks.append(
                create_file_sink(sink_cfg.directory, latency_ms=sink_cfg.latency_ms)  # type: ignore[union-attr]
            )
    return sinks


def run_bulk(bulk_size: int, stream: TextIO | None = None) -> int:
    """Batch ``stream`` (stdin by default) to the console and file sinks."""
    with BulkPipeline.from_config(BulkConfig(bulk_size)) as pipeline:
        return pipeline.run(stream if stream is not None else sys.stdin)
