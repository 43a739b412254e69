"""
httpstat

Per-phase timing (DNS, connect, wait, download) for HTTP requests made with httpx.
"""

from httpstat.domain.trace import Stats, TraceRecord, TraceSet
from httpstat.services.hooks import attach, attach_async
from httpstat.services.tracer import RequestTracer

__all__ = [
    "Stats",
    "TraceRecord",
    "TraceSet",
    "RequestTracer",
    "attach",
    "attach_async",
]
