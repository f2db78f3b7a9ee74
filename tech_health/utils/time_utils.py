"""
Time helpers for the recommendation engine.

The engine is pure apart from one wall-clock read per run. That read happens
in exactly one place (``utcnow()``, called by the engine when the caller does
not inject ``now``); everything below takes the reference time as an argument.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
_SECONDS_PER_DAY = 60 * 60 * 24
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def utcnow() -> datetime:
    """Return the current UTC datetime with timezone info.

    Prefer this over ``datetime.utcnow()`` (which returns naive datetimes).
    """
    return datetime.now(tz=timezone.utc)


def as_utc(moment: datetime) -> datetime:
    """Return ``moment`` with naive values read as UTC; aware values unchanged."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp (or pass through a ``datetime``).

    Naive values are assumed to be UTC. A trailing ``Z`` is accepted.

    Returns:
        Timezone-aware datetime, or ``None`` for absent, empty or
        unparseable input.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None

    return as_utc(parsed)


def latest_timestamp(*values: Any) -> Optional[datetime]:
    """Return the latest parseable timestamp among ``values``, or ``None``."""
    parsed = [ts for ts in (parse_timestamp(v) for v in values) if ts is not None]
    return max(parsed) if parsed else None


def days_between(earlier: datetime, later: datetime) -> float:
    """Return fractional days from ``earlier`` to ``later`` (negative if reversed).

    Naive arguments are read as UTC.
    """
    return (as_utc(later) - as_utc(earlier)).total_seconds() / _SECONDS_PER_DAY


def epoch_millis(moment: datetime) -> int:
    """Return milliseconds since the Unix epoch for ``moment``."""
    return (as_utc(moment) - _EPOCH) // timedelta(milliseconds=1)


def to_base36(value: int) -> str:
    """Encode a non-negative integer in lower-case base 36.

    Raises:
        ValueError: If ``value`` is negative.
    """
    if value < 0:
        raise ValueError(f"value must be non-negative, got {value}.")
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36_DIGITS[rem])
    return "".join(reversed(digits))
