#!/usr/bin/env python3
"""
Skills alignment between a subject and a candidate.

U = subject skills, C = candidate skills, D = skills the subject desires.
"""

from typing import AbstractSet, Dict, Any, Tuple

from core.utils import clamp01


def skill_overlaps(
    subject_skills: AbstractSet[str],
    candidate_skills: AbstractSet[str],
    desired_skills: AbstractSet[str],
) -> Tuple[int, int]:
    """Return (|U ∩ C|, |C ∩ D|)."""
    return (
        len(subject_skills & candidate_skills),
        len(candidate_skills & desired_skills),
    )


def calculate_skills_alignment(
    subject_skills: AbstractSet[str],
    candidate_skills: AbstractSet[str],
    desired_skills: AbstractSet[str],
) -> Tuple[float, Dict[str, Any]]:
    """
    (|U ∩ C| + |C ∩ D|) / (2 * max(|U|, |C|, |D|)), or 0 when all sets are empty.

    Returns:
        Tuple of (score in [0, 1], components for audit)
    """
    overlap_uc, overlap_cd = skill_overlaps(subject_skills, candidate_skills, desired_skills)
    max_possible = max(len(subject_skills), len(candidate_skills), len(desired_skills))

    if max_possible == 0:
        score = 0.0
    else:
        score = clamp01((overlap_uc + overlap_cd) / (2 * max_possible))

    return score, {
        'common_skills': overlap_uc,
        'desired_skills_matched': overlap_cd,
        'max_possible': max_possible,
    }
