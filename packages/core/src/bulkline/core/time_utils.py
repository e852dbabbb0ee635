"""Time helpers for command timestamps and bulk file names."""

from __future__ import annotations

import math
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def epoch_seconds(timestamp: datetime) -> int:
    """Whole seconds since the Unix epoch, rounded down.

    Naive datetimes are interpreted as local time, matching ``datetime.timestamp``.
    """
    return math.floor(timestamp.timestamp())
