"""Time-based identifiers.

Ids are millisecond timestamps, bumped when two are requested within the same
millisecond so that every id in a process is unique and strictly increasing.
"""

import time
from datetime import UTC, datetime

_last_issued = 0


def next_id(prefix: str = "") -> str:
    global _last_issued
    candidate = time.time_ns() // 1_000_000
    if candidate <= _last_issued:
        candidate = _last_issued + 1
    _last_issued = candidate
    return f"{prefix}{candidate}"


def utc_now() -> datetime:
    return datetime.now(UTC)


def isoformat(moment: datetime) -> str:
    """Render a timestamp the way records store it: ISO 8601, millisecond precision, ``Z`` suffix."""
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
