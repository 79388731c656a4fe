"""Shared utilities (timestamp parsing)."""

from datetime import UTC, datetime

from gistwatch.errors import TimestampParseError


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into an aware datetime.

    Accepts a trailing ``Z`` for UTC. A value without an offset is read as
    UTC.

    Raises:
        TimestampParseError: If the value is empty or not ISO-8601.
    """
    if not isinstance(value, str) or not value.strip():
        raise TimestampParseError(f"Empty or missing timestamp: {value!r}")
    text = value.strip()
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError as e:
        raise TimestampParseError(f"Malformed timestamp: {text!r}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def ensure_aware(value: datetime) -> datetime:
    """Return value with UTC attached if it has no timezone."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
