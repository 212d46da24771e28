"""
Custom SQLAlchemy types for specialized data handling.

Provides column types for normalized email addresses, ordered URL lists
and enums persisted by value.
"""

import re
from enum import Enum as PyEnum
from typing import Any, List, Optional, Type

from sqlalchemy import JSON, Enum as SAEnum, String, TypeDecorator

EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')


class EmailType(TypeDecorator):
    """
    Email type with validation and normalization.

    Stores email addresses in lowercase.
    """

    impl = String(255)
    cache_ok = True

    def process_bind_param(self, value: Optional[str], dialect) -> Optional[str]:
        """Normalize and validate email."""
        if value is None:
            return value

        email = value.strip().lower()
        if not email:
            return None
        if not EMAIL_PATTERN.match(email):
            raise ValueError(f"Invalid email format: {value}")

        return email

    def process_result_value(self, value: Optional[str], dialect) -> Optional[str]:
        return value


class URLListType(TypeDecorator):
    """
    Ordered list of URL strings stored as JSON.

    Always reads back as a list, never None.
    """

    impl = JSON
    cache_ok = True

    def process_bind_param(self, value: Any, dialect) -> List[str]:
        if value is None:
            return []
        if not isinstance(value, (list, tuple)):
            raise ValueError(f"URLListType requires a list, got {type(value)}")
        return [str(item) for item in value]

    def process_result_value(self, value: Any, dialect) -> List[str]:
        return list(value or [])


def value_enum(enum_cls: Type[PyEnum], name: str) -> SAEnum:
    """
    Enum column type that persists member values ("in-progress")
    rather than member names ("IN_PROGRESS").
    """
    return SAEnum(
        enum_cls,
        name=name,
        values_callable=lambda members: [m.value for m in members],
        native_enum=False,
        validate_strings=True,
        length=32,
    )
