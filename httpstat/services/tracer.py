"""
Request Tracer Module

Records connection lifecycle timestamps for one logical HTTP request.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from httpstat.common.time import Clock, monotonic_now, utc_now
from httpstat.config import get_settings
from httpstat.domain.trace import TraceRecord, TraceSet

logger = logging.getLogger(__name__)


class RequestTracer:
    """
    Request Tracer

    Passive timestamp recorder driven by the transport's lifecycle events.
    Per connection, events arrive in this order:

        on_connection_acquire_start -> on_dns_start -> on_dns_end
        -> on_connect_start -> on_connect_end -> on_connection_acquired
        -> on_request_written -> on_first_response_byte

    A reused connection only produces on_connection_acquired(reused=True)
    followed by the request/response events.

    One instance per request; instances share no state, so tracing
    concurrent requests needs no locking. Handlers never raise.
    """

    def __init__(
        self,
        traces: TraceSet,
        clock: Optional[Clock] = None,
        wall_clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize Tracer

        Args:
            traces: Caller-owned list that receives one record per acquired connection
            clock: Monotonic clock returning seconds, defaults to time.perf_counter
            wall_clock: UTC wall clock for TraceRecord.started_at
        """
        self._traces = traces
        self._clock = clock or monotonic_now
        self._wall_clock = wall_clock or utc_now
        self._current: Optional[TraceRecord] = None
        self._log_events = get_settings().LOG_TRACE_EVENTS

    @property
    def current(self) -> Optional[TraceRecord]:
        """Record currently receiving events"""
        return self._current

    def on_connection_acquire_start(self, address: Optional[str]) -> None:
        """
        Acquisition of a new connection began

        Args:
            address: Remote endpoint ("host:port")
        """
        self._current = self._new_record(address)
        self._log("connection_acquire_start", address=address)

    def on_connection_acquired(self, reused: bool, address: Optional[str] = None) -> None:
        """
        Connection obtained for the request

        A reused connection never went through acquire-start, so a fresh
        record is started here and any in-progress record is dropped.
        The record becomes visible in the trace set at this point.

        Args:
            reused: Connection came from the pool
            address: Remote endpoint, overrides the one given at acquire-start
        """
        if reused or self._current is None:
            self._current = self._new_record(address)
        record = self._current
        record.reused = reused
        if address is not None:
            record.address = address
        self._traces.append(record)
        self._log("connection_acquired", reused=reused, address=record.address)

    def on_dns_start(self) -> None:
        """Name resolution started"""
        self._record().dns_start = self._clock()
        self._log("dns_start")

    def on_dns_end(self) -> None:
        """Name resolution finished"""
        self._record().dns_end = self._clock()
        self._log("dns_end")

    def on_connect_start(self) -> None:
        """Transport connect started"""
        self._record().connect_start = self._clock()
        self._log("connect_start")

    def on_connect_end(self) -> None:
        """Transport connect finished"""
        self._record().connect_end = self._clock()
        self._log("connect_end")

    def on_request_written(self) -> None:
        """Request fully written; the wait phase starts"""
        self._record().request_written = self._clock()
        self._log("request_written")

    def on_first_response_byte(self) -> None:
        """First response byte received; the wait phase ends, download starts"""
        self._record().first_byte_received = self._clock()
        self._log("first_response_byte")

    def _new_record(self, address: Optional[str]) -> TraceRecord:
        return TraceRecord(
            start=self._clock(),
            address=address,
            started_at=self._wall_clock(),
            clock=self._clock,
        )

    def _record(self) -> TraceRecord:
        # Out-of-order events: start an unlisted record instead of failing
        if self._current is None:
            self._current = self._new_record(None)
        return self._current

    def _log(self, event: str, **info) -> None:
        if self._log_events:
            logger.debug("trace_event=%s info=%s", event, info)
