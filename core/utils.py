import math
import uuid
import logging
from typing import Any

from core.errors import InvalidUserIdError

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two coordinates in kilometers."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    # Rounding can push a past 1 for near-antipodal points
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def parse_user_id(value: Any) -> uuid.UUID:
    """
    Normalize a user identifier to a UUID.

    Raises:
        InvalidUserIdError: if the value is not a valid UUID
    """
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (ValueError, AttributeError, TypeError):
        raise InvalidUserIdError(f"Invalid user ID format: {value}")
