"""
Utility functions for authentication.
"""

import re
from datetime import timedelta

from domain.errors import ValidationError


_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

# Longest representable period; larger values are clamped by the session store
_MAX_SECONDS = timedelta.max.days * 86400

_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


def parse_period(period: str) -> timedelta:
    """
    Parses a session period written as a duration string.

    Pattern: one or more <number><unit> components, units ns/us/ms/s/m/h.
    Periods beyond what timedelta can hold are capped at its maximum.

    Args:
        period: Duration string (e.g. "1h", "30m", "1h30m", "1.5h")

    Returns:
        Parsed duration

    Raises:
        ValidationError: On an empty or malformed period
    Examples:
        >>> parse_period("1h30m")
        datetime.timedelta(seconds=5400)
        >>> parse_period("90s")
        datetime.timedelta(seconds=90)
    """
    text = (period or "").strip()
    if not text:
        raise ValidationError("Missing session period")

    position = 0
    seconds = 0.0
    for match in _COMPONENT.finditer(text):
        if match.start() != position:
            break
        seconds += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        position = match.end()

    if position != len(text):
        raise ValidationError(f"Invalid session period: {period!r}")

    return timedelta(seconds=min(seconds, _MAX_SECONDS))
