"""
Formatting Unit Tests
"""

from datetime import timedelta

from httpstat.common.formatting import format_ms, format_stats
from httpstat.domain.trace import Stats


def test_format_whole_milliseconds():
    assert format_ms(timedelta(milliseconds=34)) == "34ms"
    assert format_ms(timedelta(seconds=1, milliseconds=250)) == "1250ms"


def test_format_rounds_sub_millisecond():
    assert format_ms(timedelta(microseconds=4400)) == "4ms"
    assert format_ms(timedelta(microseconds=4600)) == "5ms"
    assert format_ms(timedelta(0)) == "0ms"


def test_format_negative_duration_as_is():
    assert format_ms(timedelta(milliseconds=-10)) == "-10ms"


def test_format_stats():
    stats = Stats(
        dns=timedelta(milliseconds=4),
        connect=timedelta(milliseconds=10),
        wait=timedelta(milliseconds=34),
        response=timedelta(milliseconds=40),
        download=timedelta(milliseconds=6),
        total=timedelta(milliseconds=56),
    )

    assert format_stats(stats) == {
        "dns": "4ms",
        "connect": "10ms",
        "wait": "34ms",
        "response": "40ms",
        "download": "6ms",
        "total": "56ms",
    }
