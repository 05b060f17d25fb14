# ABOUTME: SMIL clock value parsing for media overlay durations.
# ABOUTME: Converts full clock, partial clock and timecount values to seconds.

import re

_CLOCK_RE = re.compile(
    r"^(?:(?P<hours>\d+):)?(?P<minutes>\d{1,2}):(?P<seconds>\d{1,2}(?:\.\d+)?)$"
)
_TIMECOUNT_RE = re.compile(r"^(?P<count>\d+(?:\.\d+)?)(?P<metric>h|min|s|ms)?$")

_METRIC_SECONDS = {"h": 3600.0, "min": 60.0, "s": 1.0, "ms": 0.001}


def parse_clock_value(value: str | None) -> float | None:
    """Parse a SMIL clock value into seconds.

    Supports full clock values ("5:34:31.396"), partial clock values
    ("34:31.396") and timecounts ("76.2s", "7.75h", "12min", "500ms", "12").
    Returns None for anything else.
    """
    if value is None:
        return None
    value = value.strip()

    m = _CLOCK_RE.match(value)
    if m:
        hours = int(m.group("hours") or 0)
        return hours * 3600 + int(m.group("minutes")) * 60 + float(m.group("seconds"))

    m = _TIMECOUNT_RE.match(value)
    if m:
        return float(m.group("count")) * _METRIC_SECONDS[m.group("metric") or "s"]

    return None
