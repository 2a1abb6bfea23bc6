"""Datetime helpers shared across the project."""
from __future__ import annotations

from datetime import datetime, timezone


def ensure_utc(ts: datetime) -> datetime:
    """Force a naive datetime into UTC for API compatibility."""

    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def parse_iso8601(value: str) -> datetime:
    """Parse an ISO8601 string and return a timezone-aware datetime in UTC."""

    normalized = value.strip()
    if normalized.endswith("Z"):
        normalized = f"{normalized[:-1]}+00:00"

    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError as exc:
        raise ValueError(f"Invalid ISO8601 datetime: {value}") from exc

    return ensure_utc(parsed)


def parse_date(value: str) -> datetime:
    """Parse a ``YYYY-MM-DD`` day (midnight UTC) or a full ISO8601 timestamp."""

    normalized = value.strip()
    try:
        return datetime.strptime(normalized, "%Y-%m-%d").replace(tzinfo=timezone.utc)
    except ValueError:
        return parse_iso8601(normalized)


def to_millis(ts: datetime) -> int:
    return int(ensure_utc(ts).timestamp() * 1000)


def from_millis(value: int) -> datetime:
    return datetime.fromtimestamp(int(value) / 1000, tz=timezone.utc)
