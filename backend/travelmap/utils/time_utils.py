# backend/travelmap/utils/time_utils.py
"""
Time helpers.

All timestamps stored or compared by the backend are timezone-aware UTC.
"""

from datetime import datetime, timezone

UTC_TIMEZONE = timezone.utc


def utc_now() -> datetime:
    """
    Get current UTC timestamp (timezone-aware).

    Returns:
        Current UTC datetime object
    """
    return datetime.now(UTC_TIMEZONE)
