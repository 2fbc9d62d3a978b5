#!/usr/bin/env python3
"""
Professional fit, scored as location proximity.

Branches are evaluated in order and are mutually exclusive:
same city (+ same state), same state only, then distance banding.
"""

import logging
from typing import Optional, Tuple, Dict, Any

from core.matcher.models import ProfileData
from core.utils import clamp01, haversine_km

logger = logging.getLogger(__name__)

SAME_CITY_BONUS = 0.5
SAME_CITY_AND_STATE_BONUS = 0.5
SAME_STATE_BONUS = 0.3

# (max distance km, bonus), checked in order
DISTANCE_BANDS = (
    (10.0, 0.8),
    (25.0, 0.6),
    (50.0, 0.4),
    (100.0, 0.2),
)


def _same(a: Optional[str], b: Optional[str]) -> bool:
    return bool(a) and bool(b) and a == b


def distance_bonus(distance_km: float) -> float:
    for max_km, bonus in DISTANCE_BANDS:
        if distance_km <= max_km:
            return bonus
    return 0.0


def calculate_professional_fit(
    subject: ProfileData,
    candidate: ProfileData,
) -> Tuple[float, Dict[str, Any]]:
    score = 0.0
    components: Dict[str, Any] = {'rule': 'none'}

    if _same(subject.city, candidate.city):
        score += SAME_CITY_BONUS
        components['rule'] = 'same_city'
        if _same(subject.state, candidate.state):
            score += SAME_CITY_AND_STATE_BONUS
            components['rule'] = 'same_city_and_state'
    elif _same(subject.state, candidate.state):
        score += SAME_STATE_BONUS
        components['rule'] = 'same_state'
    elif subject.has_coordinates and candidate.has_coordinates:
        distance = haversine_km(
            subject.latitude, subject.longitude,
            candidate.latitude, candidate.longitude,
        )
        score += distance_bonus(distance)
        components['rule'] = 'distance'
        components['distance_km'] = distance

    return clamp01(score), components
