#!/usr/bin/env python3
"""
Utility functions for the web application.
"""

import uuid
from decimal import Decimal
from typing import Optional, Any
from datetime import datetime

from .exceptions import InvalidIdentifierException


def parse_path_uuid(value: str, name: str = "id") -> uuid.UUID:
    """
    Parse a UUID path parameter.

    Raises:
        InvalidIdentifierException: If the value is not a valid UUID.
    """
    try:
        return uuid.UUID(str(value))
    except (ValueError, AttributeError):
        raise InvalidIdentifierException(f"Invalid {name} format: {value}. Must be a valid UUID.")


def safe_float(value: Optional[Any], default: float = 0.0) -> float:
    """
    Safely convert value to float.

    Args:
        value: Value to convert (can be Decimal, int, float, or None).
        default: Default value if conversion fails or value is None.
    """
    if value is None:
        return default

    if isinstance(value, Decimal):
        return float(value)

    try:
        return float(value)
    except (ValueError, TypeError):
        return default


def safe_str(value: Optional[Any], default: str = "") -> str:
    if value is None:
        return default
    return str(value)


def safe_datetime_iso(dt: Optional[datetime]) -> Optional[str]:
    if dt is None:
        return None
    return dt.isoformat()
