"""
Error Definitions

Exceptions raised by the client glue. The tracer itself never raises.
"""

from typing import Any, Optional

from httpstat.domain.trace import TraceSet


class HttpstatError(Exception):
    """
    Library Base Exception

    Base class for all custom exceptions, containing error message and code.
    """

    def __init__(
        self,
        message: str,
        code: str = "httpstat_error",
        details: Optional[dict[str, Any]] = None,
    ):
        """
        Initialize exception

        Args:
            message: Error message
            code: Error code
            details: Extra error details
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to dictionary format (for structured reports)

        Returns:
            dict: Error information dictionary
        """
        result = {
            "error": {
                "message": self.message,
                "code": self.code,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result


class RequestFailedError(HttpstatError):
    """
    Request Failed Error

    Raised when the HTTP transport fails (connect error, timeout, protocol error).
    Carries the trace records collected before the failure.
    """

    def __init__(
        self,
        message: str = "Request failed",
        code: str = "request_failed",
        details: Optional[dict[str, Any]] = None,
        traces: Optional[TraceSet] = None,
    ):
        super().__init__(message=message, code=code, details=details)
        self.traces: TraceSet = traces if traces is not None else []
