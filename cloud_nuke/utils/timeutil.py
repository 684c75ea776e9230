"""Timestamp helpers."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Union


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_timestamp(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Parse an ISO 8601 / RFC 3339 timestamp into an aware UTC datetime.

    Accepts datetimes (boto3 already parses most timestamps), strings with a
    trailing "Z" and strings with an explicit offset.

    Args:
        value: Timestamp to parse

    Returns:
        Aware UTC datetime, or None when no value was reported

    Raises:
        ValueError: If a value was reported but cannot be parsed
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        parsed = value
    else:
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValueError(f"Invalid timestamp: {value!r}")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)
