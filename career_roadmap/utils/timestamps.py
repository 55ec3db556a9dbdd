"""Normalize stored timestamps (native, backend timestamp objects, serialized, ISO, epoch) to datetimes."""

from datetime import datetime, timezone
from typing import Any, Optional

from career_roadmap.utils.logger import get_logger

logger = get_logger(__name__)

# Methods exposed by backend timestamp objects (Firestore-style SDKs)
_CONVERTER_METHODS = ("to_datetime", "toDate", "to_date", "ToDatetime")


def _ensure_aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_datetime(value: Any) -> Optional[datetime]:
    """
    Convert a timestamp in any supported shape to a timezone-aware datetime.
    Handles: datetime, objects with to_datetime()/toDate(), {"seconds", "nanoseconds"}
    dicts (also "_seconds"/"_nanoseconds"), ISO 8601 strings and epoch milliseconds.
    Returns None if the value is missing or cannot be converted.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        return _ensure_aware(value)

    for method in _CONVERTER_METHODS:
        fn = getattr(value, method, None)
        if callable(fn):
            try:
                converted = fn()
            except Exception as e:
                logger.warning("Failed to convert timestamp via %s(): %s", method, e)
                break
            if isinstance(converted, datetime):
                return _ensure_aware(converted)
            break

    if isinstance(value, dict):
        seconds = value.get("seconds", value.get("_seconds"))
        nanos = value.get("nanoseconds", value.get("_nanoseconds", 0)) or 0
        if seconds is not None:
            try:
                return datetime.fromtimestamp(float(seconds) + float(nanos) / 1e9, tz=timezone.utc)
            except (TypeError, ValueError, OverflowError, OSError) as e:
                logger.warning("Failed to convert timestamp from seconds/nanoseconds: %s", e)
        return None

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return _ensure_aware(datetime.fromisoformat(text))
        except ValueError:
            logger.warning("Failed to parse timestamp string: %s", value[:40])
            return None

    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
        except (ValueError, OverflowError, OSError) as e:
            logger.warning("Failed to convert numeric timestamp: %s", e)
            return None

    return None


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_datetime_or_now(value: Any) -> datetime:
    """Like to_datetime, but defaults to the current UTC time."""
    return to_datetime(value) or utcnow()
