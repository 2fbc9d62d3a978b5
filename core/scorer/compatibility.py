#!/usr/bin/env python3
"""
Compatibility Score v1

Pure and deterministic: given two complete snapshots, returns a MatchScore.
The subject supplies the persona ("what I want"), the candidate is evaluated
against it, so score(A, B) need not equal score(B, A).

    overall = clamp01(
        (skills * w_skills + industry * w_industry
         + professional * w_professional + personal * w_personal)
        * (experience_base + experience_scale * experience)
    )
"""

from __future__ import annotations

import logging
from typing import Optional

from core.config_loader import ScoringWeights
from core.matcher.models import UserSnapshot
from core.scorer.models import MatchScore
from core.scorer.skills import calculate_skills_alignment
from core.scorer.location import calculate_professional_fit
from core.scorer.persona import calculate_personal_fit, calculate_experience_compatibility
from core.utils import clamp01

logger = logging.getLogger(__name__)

DEFAULT_WEIGHTS = ScoringWeights()


def calculate_industry_alignment(
    subject: UserSnapshot,
    candidate: UserSnapshot,
    weights: ScoringWeights,
) -> float:
    industry = candidate.social.declared_industry
    if industry and industry in subject.persona.industry_preferences:
        return 1.0
    return clamp01(weights.industry_floor)


def score_compatibility(
    subject: UserSnapshot,
    candidate: UserSnapshot,
    weights: Optional[ScoringWeights] = None,
) -> MatchScore:
    """Score the candidate for the subject.

    Both snapshots must carry a profile and a persona; callers filter
    incomplete snapshots before calling.

    Raises:
        ValueError: if either snapshot is incomplete
    """
    if not subject.is_complete or not candidate.is_complete:
        raise ValueError(
            f"Cannot score incomplete snapshots: subject={subject.user_id}, candidate={candidate.user_id}"
        )

    weights = weights or DEFAULT_WEIGHTS

    skills_alignment, skills_components = calculate_skills_alignment(
        subject.profile.skills,
        candidate.profile.skills,
        subject.persona.skills_desired,
    )
    industry_alignment = calculate_industry_alignment(subject, candidate, weights)
    professional_fit, location_components = calculate_professional_fit(subject.profile, candidate.profile)
    personal_fit, persona_components = calculate_personal_fit(
        subject, candidate, skills_components['common_skills'], weights
    )
    experience_compatibility = calculate_experience_compatibility(subject, candidate, weights)

    weighted = (
        skills_alignment * weights.skills
        + industry_alignment * weights.industry
        + professional_fit * weights.professional
        + personal_fit * weights.personal
    )
    multiplier = weights.experience_base + experience_compatibility * weights.experience_scale
    overall = clamp01(weighted * multiplier)

    details = {
        'skillsOverlap': f"{skills_alignment:.2f}",
        'industryMatch': f"{industry_alignment:.2f}",
        'locationMatch': f"{professional_fit:.2f}",
        'personaMatch': f"{personal_fit:.2f}",
        'experienceMatch': f"{experience_compatibility:.2f}",
        'skills': skills_components,
        'location': location_components,
        'persona': persona_components,
    }

    logger.debug(
        "Score %s -> %s: overall=%.3f (skills=%.2f, industry=%.2f, location=%.2f, persona=%.2f, exp=%.2f)",
        subject.user_id, candidate.user_id, overall,
        skills_alignment, industry_alignment, professional_fit, personal_fit, experience_compatibility
    )

    return MatchScore(
        skills_alignment=skills_alignment,
        industry_alignment=industry_alignment,
        professional_fit=professional_fit,
        personal_fit=personal_fit,
        experience_compatibility=experience_compatibility,
        overall=overall,
        details=details,
    )
