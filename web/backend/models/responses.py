#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict, Any


class MatchScores(BaseModel):
    """The five sub-scores and the overall score of a match, all in [0, 1]."""
    overall: float = Field(ge=0, le=1)
    professional_fit: float = Field(ge=0, le=1)
    personal_fit: float = Field(ge=0, le=1)
    skills_alignment: float = Field(ge=0, le=1)
    industry_alignment: float = Field(ge=0, le=1)
    experience_compatibility: float = Field(ge=0, le=1)


class UserSummary(BaseModel):
    """Display fields for one side of a match."""
    user_id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar_url: Optional[str] = None
    headline: Optional[str] = None
    profession: Optional[str] = None
    company: Optional[str] = None


class MatchSummary(BaseModel):
    """Summary of a directional match."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "match_id": "550e8400-e29b-41d4-a716-446655440000",
                "user_id": "6ba7b810-9dad-11d1-80b4-00c04fd430c8",
                "matched_user_id": "6ba7b811-9dad-11d1-80b4-00c04fd430c8",
                "matched_user": {
                    "user_id": "6ba7b811-9dad-11d1-80b4-00c04fd430c8",
                    "first_name": "Ada",
                    "last_name": "Lovelace",
                    "avatar_url": None,
                    "headline": "Engineer turned founder",
                    "profession": "Engineer",
                    "company": "Analytical Engines"
                },
                "status": "PENDING",
                "scores": {
                    "overall": 0.756,
                    "professional_fit": 0.8,
                    "personal_fit": 0.7,
                    "skills_alignment": 0.75,
                    "industry_alignment": 1.0,
                    "experience_compatibility": 1.0
                },
                "created_at": "2026-02-01T12:00:00",
                "updated_at": "2026-02-01T12:00:00"
            }
        }
    )

    match_id: str
    user_id: str
    matched_user_id: str
    matched_user: Optional[UserSummary] = None
    status: str
    scores: MatchScores
    created_at: Optional[str]
    updated_at: Optional[str]


class MatchDetail(MatchSummary):
    """Full match record including the scoring breakdown."""
    user: Optional[UserSummary] = None
    score_details: Dict[str, Any] = Field(default_factory=dict)
    scheduled_time: Optional[str] = None
    user_feedback: Optional[int] = None
    matched_user_feedback: Optional[int] = None


class MatchesResponse(BaseModel):
    """Response for the match list endpoint."""
    success: bool
    count: int
    matches: List[MatchSummary]


class MatchDetailResponse(BaseModel):
    """Response for the match detail endpoint."""
    success: bool
    match: MatchDetail


class MatchStatusResponse(BaseModel):
    """Response for accept/reject."""
    success: bool
    match_id: str
    status: str
    message: str


class MatchJobResponse(BaseModel):
    """Outcome of a recompute triggered over HTTP."""
    success: bool
    message: str
    created_count: int = 0
    updated_count: int = 0
    written_count: int = 0
    failed_count: int = 0
    skipped_pairs: int = 0
    pairs_evaluated: int = 0
    interrupted: bool = False
    error: Optional[str] = None
    execution_time: float = 0.0
