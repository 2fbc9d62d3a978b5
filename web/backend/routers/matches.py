#!/usr/bin/env python3
"""
Match endpoints - view matches and record user decisions.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database.models import MatchStatus
from ..dependencies import get_db
from ..services.match_service import MatchService
from ..models.responses import (
    MatchesResponse,
    MatchDetailResponse,
    MatchStatusResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/matches", tags=["matches"])


@router.get("/{user_id}", response_model=MatchesResponse)
def get_matches(
    user_id: str,
    status: Optional[MatchStatus] = Query(default=None, description="Only return matches in this status"),
    db: Session = Depends(get_db)
):
    """
    Get the matches where user_id is the subject.

    Returns matches sorted by overall score (highest first).
    """
    service = MatchService(db)
    matches = service.get_matches(user_id, status=status)

    return MatchesResponse(
        success=True,
        count=len(matches),
        matches=matches
    )


@router.get("/{user_id}/{matched_user_id}", response_model=MatchDetailResponse)
def get_match_details(
    user_id: str,
    matched_user_id: str,
    db: Session = Depends(get_db)
):
    """
    Get the full record for one directional match, including the scoring breakdown.
    """
    return MatchService(db).get_match_detail(user_id, matched_user_id)


@router.post("/{match_id}/accept", response_model=MatchStatusResponse)
def accept_match(
    match_id: str,
    db: Session = Depends(get_db)
):
    """Mark a match as ACCEPTED. Rescoring never resets it."""
    return MatchService(db).accept(match_id)


@router.post("/{match_id}/reject", response_model=MatchStatusResponse)
def reject_match(
    match_id: str,
    db: Session = Depends(get_db)
):
    """Mark a match as REJECTED. Rescoring never resets it."""
    return MatchService(db).reject(match_id)
