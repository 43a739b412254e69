"""
Domain Model Module Initialization
"""

from httpstat.domain.trace import (
    Stats,
    TraceRecord,
    TraceSet,
)

__all__ = [
    "Stats",
    "TraceRecord",
    "TraceSet",
]
