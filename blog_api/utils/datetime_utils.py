# blog_api/utils/datetime_utils.py
"""
Timestamps on users and posts are always timezone-aware UTC datetimes.

Values are normalised on the way into Firestore and again on the way out,
so services can compare `created_at` / `updated_at` without caring where
a document came from.
"""

from datetime import datetime, date, timezone, time
from typing import Any, Callable


def _as_utc(value: datetime) -> datetime:
    # Naive datetimes are taken to be UTC already
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _walk(value: Any, convert: Callable[[Any], Any]) -> Any:
    """Apply `convert` to every leaf of nested dicts and lists."""
    if isinstance(value, dict):
        return {key: _walk(item, convert) for key, item in value.items()}
    if isinstance(value, list):
        return [_walk(item, convert) for item in value]
    return convert(value)


class DateTimeUtils:
    """Timestamp helpers shared by the services and the document store."""

    @staticmethod
    def now() -> datetime:
        return datetime.now(timezone.utc)

    @staticmethod
    def to_iso_string(dt: datetime) -> str:
        """ISO 8601 in UTC with a ``Z`` suffix, e.g. ``2024-01-15T10:30:00Z``."""
        return _as_utc(dt).isoformat().replace('+00:00', 'Z')

    @staticmethod
    def for_firestore(obj: Any) -> Any:
        """
        Prepare a document (or a single value) for a Firestore write.
        Plain dates become midnight UTC; every datetime becomes UTC-aware.
        """
        def convert(value):
            if isinstance(value, datetime):
                return _as_utc(value)
            if isinstance(value, date):
                return datetime.combine(value, time.min, tzinfo=timezone.utc)
            return value
        return _walk(obj, convert)

    @staticmethod
    def from_firestore(obj: Any) -> Any:
        """
        Normalise a document read from Firestore. `DatetimeWithNanoseconds`
        values come back as UTC-aware datetimes.
        """
        return _walk(obj, lambda value: _as_utc(value) if isinstance(value, datetime) else value)
