"""Conversion between in-memory dates and the store's timestamp column.

The store keeps UTC. In-memory dates are timezone-aware; a naive datetime is
taken to already be UTC.
"""
from datetime import datetime, timezone


def to_store_timestamp(value: datetime) -> datetime:
    """In-memory date → UTC timestamp for the ``date`` column."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def from_store_timestamp(value: datetime) -> datetime:
    """Stored timestamp → aware UTC datetime.

    SQLite hands back naive values for ``DateTime(timezone=True)``; those were
    written as UTC by ``to_store_timestamp``.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
