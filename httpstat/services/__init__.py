"""
Service Layer Module Initialization
"""

from httpstat.services.tracer import RequestTracer
from httpstat.services.hooks import HttpcoreTraceHook, attach, attach_async

__all__ = [
    "RequestTracer",
    "HttpcoreTraceHook",
    "attach",
    "attach_async",
]
