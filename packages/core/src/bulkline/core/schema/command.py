"""Command value type fed through the batching pipeline."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ..time_utils import utc_now


class _Base(BaseModel):
    model_config = ConfigDict(frozen=True)


class Command(_Base):
    """A single line of input text and the moment it was read."""

    text: str
    timestamp: datetime = Field(default_factory=utc_now)

    @classmethod
    def now(cls, text: str) -> Command:
        return cls(text=text, timestamp=utc_now())

    def __str__(self) -> str:
        return self.text
