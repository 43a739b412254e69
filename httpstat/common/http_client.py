"""
HTTP Client Wrapper Module

Provides an asynchronous HTTP client that traces the connection timings of
every request it sends.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from httpstat.common.errors import RequestFailedError
from httpstat.common.time import Clock, monotonic_now
from httpstat.config import get_settings
from httpstat.domain.trace import Stats, TraceRecord, TraceSet
from httpstat.services.hooks import attach_async

logger = logging.getLogger(__name__)


@dataclass
class TracedResponse:
    """
    Traced Response

    An httpx response together with the trace records of the connections
    used to produce it (one per hop / retry that acquired a connection).
    """

    response: httpx.Response
    traces: TraceSet
    # Clock reading once the body was fully read
    completed: float

    @property
    def last_trace(self) -> Optional[TraceRecord]:
        """Record of the connection that produced the final response"""
        return self.traces[-1] if self.traces else None

    def stats(self) -> Optional[Stats]:
        """
        Stats of the final connection, measured up to body completion

        Returns:
            Optional[Stats]: None if no connection was observed
        """
        record = self.last_trace
        if record is None:
            return None
        return record.stats(self.completed)


class HttpClient:
    """
    Asynchronous HTTP Client Wrapper

    Wraps httpx.AsyncClient; each request gets its own tracer and trace set.
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: Optional[float] = None,
        headers: Optional[dict[str, str]] = None,
        follow_redirects: Optional[bool] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize HTTP Client

        Args:
            base_url: Base URL
            timeout: Request timeout (seconds), defaults to configuration
            headers: Default request headers
            follow_redirects: Follow redirects, defaults to configuration
            transport: Custom httpx transport
            clock: Monotonic clock used by the tracers
        """
        settings = get_settings()
        self.base_url = base_url
        self.timeout = timeout or settings.HTTP_TIMEOUT
        self.default_headers = headers or {}
        self.follow_redirects = (
            settings.FOLLOW_REDIRECTS if follow_redirects is None else follow_redirects
        )
        self._transport = transport
        self._clock = clock or monotonic_now
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                headers=self.default_headers,
                follow_redirects=self.follow_redirects,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP Client"""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        url: str,
        headers: Optional[dict[str, str]] = None,
        **kwargs: Any,
    ) -> TracedResponse:
        """
        Send a traced HTTP request

        The response body is read before returning.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: Request URL (relative to base_url)
            headers: Request headers
            **kwargs: Other httpx parameters

        Returns:
            TracedResponse: Response and its trace records

        Raises:
            RequestFailedError: The transport failed; carries partial traces
        """
        client = self._get_client()
        traces: TraceSet = []
        extensions = attach_async(kwargs.pop("extensions", None), traces, clock=self._clock)
        try:
            response = await client.request(
                method=method,
                url=url,
                headers=headers,
                extensions=extensions,
                **kwargs,
            )
        except httpx.HTTPError as exc:
            logger.warning(
                "Traced request failed: %s %s (%s) after %d connection(s)",
                method,
                url,
                type(exc).__name__,
                len(traces),
            )
            raise RequestFailedError(
                message=str(exc) or type(exc).__name__,
                details={"method": method, "url": url, "error_type": type(exc).__name__},
                traces=traces,
            ) from exc

        completed = self._clock()
        logger.debug(
            "Traced request done: %s %s status=%d connections=%d",
            method,
            url,
            response.status_code,
            len(traces),
        )
        return TracedResponse(response=response, traces=traces, completed=completed)

    async def get(
        self,
        url: str,
        headers: Optional[dict[str, str]] = None,
        **kwargs: Any,
    ) -> TracedResponse:
        """Send a traced GET request"""
        return await self.request("GET", url, headers=headers, **kwargs)
