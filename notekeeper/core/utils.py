"""
Core Utilities.

Shared utility functions used across the package.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Return current UTC time as a timezone-aware datetime.

    Note rows are stamped by the client clock, so the offset is kept
    when the value is serialized to ISO-8601 for the backend.
    """
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    """Return current UTC time formatted as ISO-8601."""
    return utc_now().isoformat()
