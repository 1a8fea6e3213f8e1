"""TTML clock-time handling.

Transcripts carry begin/end attributes like ``00:05:09.120``. Two forms are
derived from them: a short display string for reading views and a numeric
seconds value for pause detection.
"""

from __future__ import annotations

import re

_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2}):(\d{2})\.?(\d*)")


def format_time(value: str | None) -> str:
    """Format a clock time for display.

    ``01:02:03`` becomes ``1:02:03``; times under an hour drop the hour and
    the leading zero of the minutes (``00:05:09.120`` becomes ``5:09``).
    Values that are not clock times are returned unchanged.
    """
    if not value:
        return ""

    match = _CLOCK_RE.match(value)
    if not match:
        return value

    hours = int(match.group(1))
    minutes = match.group(2)
    seconds = match.group(3)
    if hours > 0:
        return f"{hours}:{minutes}:{seconds}"
    return f"{int(minutes)}:{seconds}"


def parse_seconds(value: str | None) -> float | None:
    """Convert a clock time to seconds, or None if it is not one."""
    if not value:
        return None

    match = _CLOCK_RE.match(value)
    if not match:
        return None

    hours, minutes, seconds = (int(match.group(i)) for i in (1, 2, 3))
    fraction = match.group(4)
    ms = int(fraction.ljust(3, "0")[:3]) if fraction else 0
    return hours * 3600 + minutes * 60 + seconds + ms / 1000
