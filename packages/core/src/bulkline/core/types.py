"""Configuration types for the bulkline pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

__all__ = [
    "BulkConfigError",
    "ConsoleSinkConfig",
    "FileSinkConfig",
    "SinkConfig",
    "BulkConfig",
    "DEFAULT_OPEN_MARKER",
    "DEFAULT_CLOSE_MARKER",
    "parse_bulk_size",
]

DEFAULT_OPEN_MARKER = "{"
DEFAULT_CLOSE_MARKER = "}"


class BulkConfigError(ValueError):
    """Raised for a missing or invalid bulk size."""


def parse_bulk_size(value: str | int | None) -> int:
    """Validate a bulk size taken from the command line or the environment."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise BulkConfigError("Bulk size is not specified.")
    if isinstance(value, bool):
        raise BulkConfigError("Invalid bulk size.")
    try:
        size = int(value)
    except (TypeError, ValueError):
        raise BulkConfigError("Invalid bulk size.") from None
    if size <= 0:
        raise BulkConfigError("Invalid bulk size.")
    return size


# ---------------------------------------------------------------------------
# Sink configuration
# ---------------------------------------------------------------------------


class ConsoleSinkConfig:
    def __init__(self) -> None:
        self.type: Literal["console"] = "console"


class FileSinkConfig:
    def __init__(self, directory: str | Path = ".", latency_ms: float = 1) -> None:
        self.type: Literal["file"] = "file"
        self.directory = Path(directory)
        self.latency_ms = latency_ms


SinkConfig = ConsoleSinkConfig | FileSinkConfig


# ---------------------------------------------------------------------------
# BulkConfig
# ---------------------------------------------------------------------------


class BulkConfig:
    """Everything needed to build a pipeline.

    ``sinks=None`` means the standard pair: console then file in the working
    directory. Pass an empty list for a pipeline with no output.
    """

    def __init__(
        self,
        bulk_size: int,
        sinks: list[SinkConfig] | None = None,
        open_marker: str = DEFAULT_OPEN_MARKER,
        close_marker: str = DEFAULT_CLOSE_MARKER,
    ) -> None:
        self.bulk_size = parse_bulk_size(bulk_size)
        if open_marker == close_marker:
            raise BulkConfigError("Block markers must differ.")
        self.sinks: list[SinkConfig] = (
            [ConsoleSinkConfig(), FileSinkConfig()] if sinks is None else list(sinks)
        )
        self.open_marker = open_marker
        self.close_marker = close_marker
