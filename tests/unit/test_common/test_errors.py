"""
Error Definitions Unit Tests
"""

from httpstat.common.errors import HttpstatError, RequestFailedError
from httpstat.domain.trace import TraceRecord


def test_to_dict_without_details():
    error = HttpstatError("boom")

    assert error.to_dict() == {"error": {"message": "boom", "code": "httpstat_error"}}


def test_to_dict_with_details():
    error = RequestFailedError(details={"url": "https://example.com/"})

    assert error.to_dict() == {
        "error": {
            "message": "Request failed",
            "code": "request_failed",
            "details": {"url": "https://example.com/"},
        }
    }


def test_request_failed_carries_traces():
    record = TraceRecord(start=1.0)

    error = RequestFailedError(traces=[record])

    assert isinstance(error, HttpstatError)
    assert error.traces == [record]
    assert RequestFailedError().traces == []
