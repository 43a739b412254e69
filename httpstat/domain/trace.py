"""
Trace Domain Model

Defines the per-connection trace record and the frozen stats snapshot derived from it.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timedelta
from typing import Optional

from httpstat.common.time import Clock, elapsed, monotonic_now


@dataclass(frozen=True)
class Stats:
    """
    Stats Snapshot

    Six durations derived from one TraceRecord at a point in time.
    Immutable; carries no reference back to the record.
    """

    # DNS resolution
    dns: timedelta
    # TCP / transport connect
    connect: timedelta
    # Request written -> first response byte
    wait: timedelta
    # Request written -> now
    response: timedelta
    # First response byte -> now
    download: timedelta
    # Acquisition start -> now
    total: timedelta

    def as_milliseconds(self) -> dict[str, int]:
        """
        Convert to a dictionary of whole milliseconds (for structured output)

        Returns:
            dict: Field name -> milliseconds
        """
        return {
            name: round(value / timedelta(milliseconds=1))
            for name, value in asdict(self).items()
        }


@dataclass
class TraceRecord:
    """
    Trace Record

    Timestamps observed for one underlying connection used by a request.
    Mutated by RequestTracer handlers until the first response byte arrives.
    All timestamps are readings of the tracer's clock; None means "not observed".
    """

    # Monotonic reading when acquisition of this connection began
    start: float
    # Remote endpoint ("host:port")
    address: Optional[str] = None
    # Wall-clock time matching `start`
    started_at: Optional[datetime] = None
    # Connection came from the pool
    reused: bool = False
    dns_start: Optional[float] = None
    dns_end: Optional[float] = None
    connect_start: Optional[float] = None
    connect_end: Optional[float] = None
    request_written: Optional[float] = None
    first_byte_received: Optional[float] = None
    # Used when a query is made without an explicit `now`
    clock: Clock = field(default=monotonic_now, repr=False, compare=False)

    def dns_time(self) -> timedelta:
        """DNS resolution time, zero if not observed"""
        return elapsed(self.dns_start, self.dns_end)

    def connect_time(self) -> timedelta:
        """Connect time, zero for a reused connection"""
        return elapsed(self.connect_start, self.connect_end)

    def wait_time(self) -> timedelta:
        """Request written -> first response byte"""
        return elapsed(self.request_written, self.first_byte_received)

    def response_time(self, now: Optional[float] = None) -> timedelta:
        """Request written -> now"""
        return elapsed(self.request_written, self._now(now))

    def download_time(self, now: Optional[float] = None) -> timedelta:
        """First response byte -> now"""
        return elapsed(self.first_byte_received, self._now(now))

    def total_time(self, now: Optional[float] = None) -> timedelta:
        """
        Acquisition start -> now

        Args:
            now: Clock reading, defaults to the current reading of the record's clock

        Returns:
            timedelta: Elapsed time
        """
        return elapsed(self.start, self._now(now))

    def stats(self, now: Optional[float] = None) -> Stats:
        """
        Take a stats snapshot

        Args:
            now: Clock reading to measure open-ended phases against,
                defaults to the current reading of the record's clock

        Returns:
            Stats: Frozen snapshot
        """
        now = self._now(now)
        return Stats(
            dns=self.dns_time(),
            connect=self.connect_time(),
            wait=self.wait_time(),
            response=self.response_time(now),
            download=self.download_time(now),
            total=self.total_time(now),
        )

    def _now(self, now: Optional[float]) -> float:
        return self.clock() if now is None else now


# Ordered records for one logical request, one per connection used.
TraceSet = list[TraceRecord]
