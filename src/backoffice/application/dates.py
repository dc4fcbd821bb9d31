"""Date helpers shared by the filters, the sort keys and the exporters.

Stored timestamps are ISO-8601 strings, usually UTC with a ``Z`` suffix.
Time windows ("today", "yesterday") are expressed in the local time of
the machine running the back office, so comparisons happen on naive
local datetimes.
"""

from __future__ import annotations

from datetime import datetime, time

from backoffice.domain.exceptions import ValidationError


def as_local(value: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def parse_timestamp(raw: str) -> datetime:
    """Parse a stored ISO-8601 timestamp (``Z`` accepted)."""
    text = raw.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def parse_user_date(raw: str, label: str) -> datetime:
    """Parse a date typed by a user (``2024-03-01`` or a full timestamp)."""
    try:
        return as_local(parse_timestamp(raw))
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid {label} format: {raw!r}") from None


def end_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.max)


def format_timestamp(value: datetime | None) -> str:
    if value is None:
        return ""
    return value.isoformat().replace("+00:00", "Z")
