"""Datetime utilities for timezone-aware UTC timestamps."""
from __future__ import annotations

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


def utc_string(value: datetime | None = None) -> str:
    """Format a timestamp the way bounce history entries store it."""
    return (value or utcnow()).astimezone(UTC).strftime("%Y-%m-%d %H:%M:%S")
