"""
Formatting helpers for reporting trace durations.
"""

from datetime import timedelta

from httpstat.domain.trace import Stats


def format_ms(duration: timedelta) -> str:
    """Render a duration as whole milliseconds, e.g. "34ms"."""
    return f"{duration / timedelta(milliseconds=1):.0f}ms"


def format_stats(stats: Stats) -> dict[str, str]:
    return {
        "dns": format_ms(stats.dns),
        "connect": format_ms(stats.connect),
        "wait": format_ms(stats.wait),
        "response": format_ms(stats.response),
        "download": format_ms(stats.download),
        "total": format_ms(stats.total),
    }
