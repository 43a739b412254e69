"""
Time Utilities

Clock policy:
- Phase timestamps come from a monotonic, high-precision clock (time.perf_counter).
- Wall-clock values are UTC-aware datetimes and are only used for display.
"""

from __future__ import annotations

import time
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

UTC = timezone.utc

# A clock returns seconds as a float; only differences between readings matter.
Clock = Callable[[], float]


def monotonic_now() -> float:
    """Return the current reading of the monotonic clock (seconds)."""
    return time.perf_counter()


def utc_now() -> datetime:
    """Return current UTC time (timezone-aware)."""
    return datetime.now(UTC)


def elapsed(start: Optional[float], end: Optional[float]) -> timedelta:
    """
    Duration between two clock readings.

    - If either reading is missing, the phase was not observed: zero.
    - No clamping otherwise; out-of-order readings give a negative duration.
    """
    if start is None or end is None:
        return timedelta(0)
    return timedelta(seconds=end - start)
