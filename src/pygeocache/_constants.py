"""Internal constants shared across the library."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

DEFAULT_CACHE_PREFIX = "CACHE-"
DEFAULT_LOG_PREFIX = "LOG-"
DEFAULT_TRACKABLE_PREFIX = "TRACKABLE-"

# Upper bound appended to a prefix for range scans; sorts after every other code point.
RANGE_END_SUFFIX = "\U0010ffff"


class RecordKind(StrEnum):
    CACHE = "cache"
    LOG = "log"
    TRACKABLE = "trackable"


def format_ledger_time(moment: datetime) -> str:
    """Render *moment* as ISO-8601 UTC with millisecond precision and ``Z``.

    Fixed width, so lexicographic order of the result equals chronological
    order (``2024-05-01T12:00:00.000Z``).
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    utc = moment.astimezone(UTC)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"
