#!/usr/bin/env python3
"""
Scoring Module - pairwise compatibility scoring.

Public API:
- score_compatibility: Score a candidate for a subject
- MatchScore: Dataclass for the five sub-scores and the overall score

Modules:

- models.py: Data structures (MatchScore, ScoredPair)
- skills.py: Skills alignment
- location.py: Professional fit (location proximity)
- persona.py: Personal fit (complement/mirror) and experience compatibility
- compatibility.py: Weighted combination
- persistence.py: Retrying per-pair writes to the matches table
"""

from core.scorer.models import MatchScore, ScoredPair
from core.scorer.compatibility import score_compatibility

__all__ = ['score_compatibility', 'MatchScore', 'ScoredPair']
