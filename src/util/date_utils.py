"""
Date and time helpers.
All timestamps handled by the sync are timezone-aware UTC datetimes.
"""

from datetime import datetime, timezone

# Format of the `since` query parameter understood by Highrise
SINCE_FORMAT = "%Y%m%d%H%M%S"


def ensure_utc(value: datetime) -> datetime:
    """
    Return the datetime as an aware UTC value.
    Naive datetimes are assumed to already be in UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_datetime(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp such as 2017-03-02T10:00:00Z.

    Args:
        value: Timestamp string, with `Z` or an explicit offset

    Returns:
        datetime: Aware UTC datetime

    Raises:
        ValueError: If the string is not a valid timestamp
    """
    value = value.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return ensure_utc(datetime.fromisoformat(value))


def format_since(checkpoint: datetime) -> str:
    """
    Render a checkpoint as the yyyymmddhhmmss UTC value of Highrise's
    `since` parameter.
    """
    return ensure_utc(checkpoint).strftime(SINCE_FORMAT)


def to_epoch_seconds(value: datetime) -> float:
    """Seconds since the Unix epoch, as used by Slack's `ts` field."""
    return ensure_utc(value).timestamp()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
