"""
Date Utilities
==============

Privacy-preserving date coarsening for partner-facing reports.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Union


def parse_timestamp(value: Union[str, datetime]) -> datetime:
    """
    Parse an ISO-8601 timestamp into an aware UTC datetime.

    A trailing ``Z`` is accepted. Naive values are taken to be UTC.

    Raises:
        ValueError: If the string is not a valid ISO-8601 timestamp
    """
    if isinstance(value, datetime):
        dt = value
    else:
        text = value.strip()
        if text.endswith("Z") or text.endswith("z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def date_to_quarter(value: Union[str, datetime]) -> str:
    """
    Convert an exact date to its calendar quarter label.

    The year and month are read in UTC, so the result does not depend on
    the local timezone of the caller.

    Args:
        value: ISO-8601 string or datetime

    Returns:
        Label of the form ``"Q4 2023"``

    Example:
        >>> date_to_quarter("2023-12-10T16:45:00Z")
        'Q4 2023'
    """
    dt = parse_timestamp(value)
    quarter = (dt.month - 1) // 3 + 1
    return f"Q{quarter} {dt.year}"


def quarter_or_none(value: Optional[Union[str, datetime]]) -> Optional[str]:
    """Quarter label for ``value``, or None when no date is recorded."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return date_to_quarter(value)
