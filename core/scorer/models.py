#!/usr/bin/env python3
"""
Scoring Models - Data structures for compatibility results.
"""

from typing import Dict, Any
from dataclasses import dataclass, field


@dataclass(frozen=True)
class MatchScore:
    """Compatibility of a candidate for a subject. All values in [0, 1]."""
    skills_alignment: float = 0.0
    industry_alignment: float = 0.0
    professional_fit: float = 0.0
    personal_fit: float = 0.0
    experience_compatibility: float = 0.0
    overall: float = 0.0

    details: Dict[str, Any] = field(default_factory=dict, compare=False)

    def as_columns(self) -> Dict[str, Any]:
        """Column values for the matches table."""
        return {
            'score_overall': float(self.overall),
            'score_professional_fit': float(self.professional_fit),
            'score_personal_fit': float(self.personal_fit),
            'score_skills_alignment': float(self.skills_alignment),
            'score_industry_alignment': float(self.industry_alignment),
            'score_experience_compatibility': float(self.experience_compatibility),
            'score_details': dict(self.details),
        }


@dataclass(frozen=True)
class ScoredPair:
    """A directional (subject -> candidate) match that passed the threshold."""
    user_id: Any
    matched_user_id: Any
    score: MatchScore
