#!/usr/bin/env python3
"""
Persona-driven sub-scores: personal fit (complement vs. mirror) and
experience compatibility.
"""

from typing import Tuple, Dict, Any

from core.config_loader import ScoringWeights
from core.matcher.models import UserSnapshot, MatchType, ExperienceLevel
from core.utils import clamp01

SKILLS_SHARE = 0.7
PROFESSION_SHARE = 0.3


def calculate_personal_fit(
    subject: UserSnapshot,
    candidate: UserSnapshot,
    common_skills: int,
    weights: ScoringWeights,
) -> Tuple[float, Dict[str, Any]]:
    """
    COMPLEMENT rewards different skills and a different profession,
    MIRROR rewards shared skills and the same profession.
    """
    match_type = subject.persona.match_type
    same_skills_ratio = common_skills / max(len(subject.profile.skills), 1)
    same_profession = subject.profile.profession == candidate.profile.profession

    if match_type == MatchType.COMPLEMENT:
        skills_ratio = 1 - same_skills_ratio
        profession_bonus = 0.0 if same_profession else 1.0
    elif match_type == MatchType.MIRROR:
        skills_ratio = same_skills_ratio
        profession_bonus = 1.0 if same_profession else 0.0
    else:
        return clamp01(weights.neutral_personal_fit), {'match_type': None}

    score = SKILLS_SHARE * skills_ratio + PROFESSION_SHARE * profession_bonus
    return clamp01(score), {
        'match_type': match_type.value,
        'skills_ratio': skills_ratio,
        'profession_bonus': profession_bonus,
    }


def calculate_experience_compatibility(
    subject: UserSnapshot,
    candidate: UserSnapshot,
    weights: ScoringWeights,
) -> float:
    wanted = subject.persona.experience_level_preference
    if wanted == ExperienceLevel.ANY or wanted == candidate.persona.experience_level_preference:
        return 1.0
    return clamp01(weights.experience_mismatch)
