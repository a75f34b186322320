"""ISO 8601 datetime conversion utilities.

This module centralizes all transformations between Python datetime objects,
ISO 8601 strings and Unix timestamps. Stored timestamps and JWT claims should
go through these functions to stay consistent.
"""

from datetime import datetime, UTC


def to_timestamp(dt: datetime) -> str:
    """Convert datetime to ISO 8601 UTC timestamp string."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.isoformat(timespec="microseconds").replace("+00:00", "Z")


def utcnow() -> datetime:
    """Get current time as an aware UTC datetime."""
    return datetime.now(UTC)


def now() -> str:
    """Get current UTC timestamp as ISO 8601 string."""
    return to_timestamp(utcnow())


def to_unix(dt: datetime) -> int:
    """Convert datetime to integer Unix timestamp (naive values are UTC)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return int(dt.timestamp())


def from_unix(ts: int) -> datetime:
    """Convert Unix timestamp to aware UTC datetime."""
    return datetime.fromtimestamp(ts, UTC)


def now_unix() -> int:
    """Get current time as integer Unix timestamp."""
    return to_unix(utcnow())
