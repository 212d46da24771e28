# maintenance_portal/core/utils.py
"""
Small shared helpers used by models, repositories and services.
"""

from datetime import datetime, timezone
from typing import Iterable, List, Optional


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a datetime to timezone-aware UTC.

    Naive values are assumed to already be UTC (SQLite drops offsets on
    the way back out of the database).
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def clean_strings(values: Optional[Iterable[str]]) -> List[str]:
    """Strip each value and drop empties, keeping order."""
    if not values:
        return []
    return [str(v).strip() for v in values if not is_blank(v)]
