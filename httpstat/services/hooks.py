"""
Transport Hook Module

Installs a RequestTracer into an httpx request through the httpcore "trace"
request extension. httpcore calls the extension with "<scope>.<step>.<phase>"
event names (e.g. "connection.connect_tcp.started") and an info dict.

httpcore resolves host names inside connect_tcp and emits no DNS event, so with
httpx the resolution time is part of connect time.
"""

import logging
from typing import Any, Awaitable, Callable, Mapping, Optional

from httpstat.common.time import Clock
from httpstat.domain.trace import TraceSet
from httpstat.services.tracer import RequestTracer

logger = logging.getLogger(__name__)

TraceCallback = Callable[[str, dict[str, Any]], None]
AsyncTraceCallback = Callable[[str, dict[str, Any]], Awaitable[None]]

DEFAULT_PORTS = {
    b"http": 80,
    b"https": 443,
    b"ws": 80,
    b"wss": 443,
}

CONNECT_STARTED = {
    "connection.connect_tcp.started",
    "connection.connect_unix_socket.started",
}
CONNECT_COMPLETE = {
    "connection.connect_tcp.complete",
    "connection.connect_unix_socket.complete",
}
CONNECT_FAILED = {
    "connection.connect_tcp.failed",
    "connection.connect_unix_socket.failed",
}
REQUEST_HEADERS_STARTED = {
    "http11.send_request_headers.started",
    "http2.send_request_headers.started",
}
REQUEST_BODY_COMPLETE = {
    "http11.send_request_body.complete",
    "http2.send_request_body.complete",
}
RESPONSE_HEADERS_COMPLETE = {
    "http11.receive_response_headers.complete",
    "http2.receive_response_headers.complete",
}


def join_host_port(host: str, port: Any) -> str:
    """Join host and port, bracketing IPv6 literals ("[::1]:8080")"""
    if ":" in host and not host.startswith("["):
        host = f"[{host}]"
    return f"{host}:{port}"


def connect_address(info: Mapping[str, Any]) -> Optional[str]:
    """Endpoint named by a connect_tcp / connect_unix_socket event"""
    if info.get("path") is not None:
        return str(info["path"])
    host = info.get("host")
    if host is None:
        return None
    return join_host_port(host, info.get("port"))


def request_address(info: Mapping[str, Any]) -> Optional[str]:
    """Endpoint of the httpcore request carried by a send_request_headers event"""
    request = info.get("request")
    url = getattr(request, "url", None)
    if url is None:
        return None
    host = url.host.decode("ascii")
    port = url.port or DEFAULT_PORTS.get(url.scheme)
    return join_host_port(host, port)


class HttpcoreTraceHook:
    """
    Maps httpcore trace events onto RequestTracer handlers.

    httpcore has no pool events, so acquisition is inferred: a connect before
    the request headers means a new connection, headers with no preceding
    connect mean the pool handed out a kept-alive one.
    """

    def __init__(self, tracer: RequestTracer):
        self.tracer = tracer
        self._dialed = False

    def handle(self, event_name: str, info: Mapping[str, Any]) -> None:
        tracer = self.tracer
        if event_name in CONNECT_STARTED:
            tracer.on_connection_acquire_start(connect_address(info))
            tracer.on_connect_start()
            self._dialed = True
        elif event_name in CONNECT_COMPLETE:
            tracer.on_connect_end()
        elif event_name in CONNECT_FAILED:
            # Nothing was acquired; a retry starts a fresh record
            self._dialed = False
        elif event_name in REQUEST_HEADERS_STARTED:
            tracer.on_connection_acquired(
                reused=not self._dialed,
                address=request_address(info),
            )
            self._dialed = False
        elif event_name in REQUEST_BODY_COMPLETE:
            tracer.on_request_written()
        elif event_name in RESPONSE_HEADERS_COMPLETE:
            tracer.on_first_response_byte()


def attach(
    extensions: Optional[Mapping[str, Any]],
    traces: TraceSet,
    clock: Optional[Clock] = None,
) -> dict[str, Any]:
    """
    Instrument a request for a synchronous httpx client

    Args:
        extensions: Request extensions to build on (not modified)
        traces: Caller-owned list that receives the trace records
        clock: Monotonic clock, defaults to time.perf_counter

    Returns:
        dict: New extensions with a "trace" callback; pass as
            `extensions=` to httpx.Client.request / build_request
    """
    extensions = dict(extensions or {})
    hook = HttpcoreTraceHook(RequestTracer(traces, clock=clock))
    previous: Optional[TraceCallback] = extensions.get("trace")

    def trace(event_name: str, info: dict[str, Any]) -> None:
        hook.handle(event_name, info)
        if previous is not None:
            previous(event_name, info)

    extensions["trace"] = trace
    logger.debug("Attached request tracer (sync)")
    return extensions


def attach_async(
    extensions: Optional[Mapping[str, Any]],
    traces: TraceSet,
    clock: Optional[Clock] = None,
) -> dict[str, Any]:
    """
    Instrument a request for an asynchronous httpx client

    Same as attach(), but httpcore's async interface requires the "trace"
    callback to be a coroutine function.
    """
    extensions = dict(extensions or {})
    hook = HttpcoreTraceHook(RequestTracer(traces, clock=clock))
    previous: Optional[AsyncTraceCallback] = extensions.get("trace")

    async def trace(event_name: str, info: dict[str, Any]) -> None:
        hook.handle(event_name, info)
        if previous is not None:
            await previous(event_name, info)

    extensions["trace"] = trace
    logger.debug("Attached request tracer (async)")
    return extensions
