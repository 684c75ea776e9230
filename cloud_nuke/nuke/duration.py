"""Duration parsing and age cutoff computation.

Durations use Go duration syntax: a sequence of decimal
numbers with unit suffixes, such as "300ms", "10m", "1.5h" or "2h45m".
Valid units are "ns", "us" (or "µs"), "ms", "s", "m" and "h".
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Optional

from ..errors import DurationParseError
from ..models.scope import AgeCutoff, UndatedPolicy
from ..utils.timeutil import utcnow

_UNIT_SECONDS = {
    "ns": Decimal("1e-9"),
    "us": Decimal("1e-6"),
    "µs": Decimal("1e-6"),
    "μs": Decimal("1e-6"),
    "ms": Decimal("1e-3"),
    "s": Decimal(1),
    "m": Decimal(60),
    "h": Decimal(3600),
}

_COMPONENT_RE = re.compile(r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


def parse_duration(value: str) -> timedelta:
    """Parse a duration string.

    Args:
        value: Duration such as "10m" or "8h"; "0" is accepted

    Returns:
        Parsed duration

    Raises:
        DurationParseError: If the value is malformed or negative
    """
    text = (value or "").strip()
    if not text:
        raise DurationParseError(value, "empty duration")

    if text.startswith("-"):
        if text[1:] in ("0", "+0"):
            return timedelta(0)
        raise DurationParseError(value, "duration must not be negative")
    if text.startswith("+"):
        text = text[1:]
        if not text:
            raise DurationParseError(value, "empty duration")

    if text == "0":
        return timedelta(0)

    total = Decimal(0)
    position = 0
    while position < len(text):
        match = _COMPONENT_RE.match(text, position)
        if not match:
            raise DurationParseError(value, "expected <number><unit> with unit one of ns, us, ms, s, m, h")
        try:
            total += Decimal(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        except InvalidOperation:
            raise DurationParseError(value, f"invalid number '{match.group(1)}'")
        position = match.end()

    try:
        return timedelta(seconds=float(total))
    except OverflowError:
        raise DurationParseError(value, "duration out of range")


def compute_cutoff(
    older_than: str,
    now: Optional[datetime] = None,
    undated_policy: UndatedPolicy = UndatedPolicy.ELIGIBLE,
) -> AgeCutoff:
    """Compute the age cutoff for a run.

    Args:
        older_than: Duration string from --older-than
        now: Run start time (defaults to the current UTC time)
        undated_policy: Treatment of resources without a creation time

    Returns:
        AgeCutoff at now minus the duration
    """
    duration = parse_duration(older_than)
    start = now or utcnow()
    try:
        instant = start - duration
    except OverflowError:
        raise DurationParseError(older_than, "duration reaches before year 1")
    return AgeCutoff(instant=instant, older_than=duration, undated_policy=undated_policy)
