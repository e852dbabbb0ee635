"""Sink protocol and the shared bulk line format."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..schema.command import Command

BULK_PREFIX = "bulk: "


def format_bulk(batch: Sequence[Command]) -> str:
    """Render a batch as ``bulk: a, b, c`` in arrival order."""
    return BULK_PREFIX + ", ".join(command.text for command in batch)


class Sink(ABC):
    """A sink receives finished batches and writes them somewhere.

    Only ``write_batch`` is mandatory; ``update`` and ``close`` are optional
    no-ops by default.
    """

    def update(self, batch: Sequence[Command]) -> None:
        """Called after every accepted command with the in-progress batch."""

    @abstractmethod
    def write_batch(self, batch: Sequence[Command]) -> None:
        """Write a finished, non-empty batch. Must not mutate it."""

    def close(self) -> None:
        """Release resources once the processor shuts down."""
