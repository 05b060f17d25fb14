# ABOUTME: Lenient ISO 8601 date parsing for OPF date values.
# ABOUTME: Accepts year-only and year-month forms that EPUB producers commonly emit.

import logging
import re
from datetime import datetime

logger = logging.getLogger(__name__)

_PARTIAL_DATE_RE = re.compile(r"^(?P<year>\d{4})(?:-(?P<month>\d{2}))?$")


def parse_iso8601(text: str | None) -> datetime | None:
    """Parse an ISO 8601 date or datetime, or return None if it cannot be read."""
    if not text:
        return None
    value = text.strip()

    m = _PARTIAL_DATE_RE.match(value)
    if m:
        try:
            return datetime(int(m.group("year")), int(m.group("month") or 1), 1)
        except ValueError:
            logger.debug("Ignoring invalid date %r", text)
            return None

    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        logger.debug("Ignoring invalid date %r", text)
        return None
