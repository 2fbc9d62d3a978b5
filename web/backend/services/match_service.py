#!/usr/bin/env python3
"""
Match service - business logic for reading matches and user decisions.
"""

import logging
from typing import List, Optional, Dict, Any
from sqlalchemy.orm import Session

from database.models import Match, MatchStatus, User
from database.repositories import MatchRepository
from ..models.responses import (
    MatchScores,
    UserSummary,
    MatchSummary,
    MatchDetail,
    MatchDetailResponse,
    MatchStatusResponse
)
from ..utils import parse_path_uuid, safe_float, safe_str, safe_datetime_iso
from ..exceptions import MatchNotFoundException

logger = logging.getLogger(__name__)


class MatchService:
    """Service for reading matches and recording accept/reject decisions."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = MatchRepository(db)

    def get_matches(
        self,
        user_id: str,
        status: Optional[MatchStatus] = None
    ) -> List[MatchSummary]:
        """
        Get the user's directional matches, best first.

        Args:
            user_id: The subject user.
            status: Optional status filter.

        Returns:
            List of match summaries.
        """
        uid = parse_path_uuid(user_id, "user_id")
        matches = self.repo.get_matches_for_user(
            uid,
            status=status.value if status is not None else None
        )
        return [self._to_match_summary(m) for m in matches]

    def get_match_detail(self, user_id: str, matched_user_id: str) -> MatchDetailResponse:
        """
        Get the match of matched_user_id for user_id.

        Raises:
            MatchNotFoundException: If the pair has no match.
        """
        uid = parse_path_uuid(user_id, "user_id")
        mid = parse_path_uuid(matched_user_id, "matched_user_id")

        match = self.repo.get_match(uid, mid)
        if not match:
            raise MatchNotFoundException(f"No match for user {user_id} and {matched_user_id}")

        return MatchDetailResponse(success=True, match=self._to_match_detail(match))

    def accept(self, match_id: str) -> MatchStatusResponse:
        return self._set_status(match_id, MatchStatus.ACCEPTED, "Match accepted successfully")

    def reject(self, match_id: str) -> MatchStatusResponse:
        return self._set_status(match_id, MatchStatus.REJECTED, "Match rejected successfully")

    def _set_status(self, match_id: str, status: MatchStatus, message: str) -> MatchStatusResponse:
        """
        Raises:
            MatchNotFoundException: If match is not found.
        """
        mid = parse_path_uuid(match_id, "match_id")
        if not self.repo.set_status(mid, status):
            self.db.rollback()
            raise MatchNotFoundException(f"Match {match_id} not found")

        self.db.commit()
        return MatchStatusResponse(
            success=True,
            match_id=str(mid),
            status=status.value,
            message=message
        )

    def _to_scores(self, match: Match) -> MatchScores:
        return MatchScores(
            overall=safe_float(match.score_overall),
            professional_fit=safe_float(match.score_professional_fit),
            personal_fit=safe_float(match.score_personal_fit),
            skills_alignment=safe_float(match.score_skills_alignment),
            industry_alignment=safe_float(match.score_industry_alignment),
            experience_compatibility=safe_float(match.score_experience_compatibility),
        )

    def _to_user_summary(self, user: Optional[User]) -> Optional[UserSummary]:
        if user is None:
            return None
        profile = user.profile
        return UserSummary(
            user_id=safe_str(user.id),
            first_name=user.first_name,
            last_name=user.last_name,
            avatar_url=user.avatar_url,
            headline=profile.headline if profile else None,
            profession=profile.profession if profile else None,
            company=profile.company if profile else None,
        )

    def _to_match_summary(self, match: Match) -> MatchSummary:
        return MatchSummary(
            match_id=safe_str(match.id),
            user_id=safe_str(match.user_id),
            matched_user_id=safe_str(match.matched_user_id),
            matched_user=self._to_user_summary(match.matched_user),
            status=match.status,
            scores=self._to_scores(match),
            created_at=safe_datetime_iso(match.created_at),
            updated_at=safe_datetime_iso(match.updated_at),
        )

    def _to_match_detail(self, match: Match) -> MatchDetail:
        details: Dict[str, Any] = match.score_details if isinstance(match.score_details, dict) else {}
        return MatchDetail(
            **self._to_match_summary(match).model_dump(),
            user=self._to_user_summary(match.user),
            score_details=details,
            scheduled_time=safe_datetime_iso(match.scheduled_time),
            user_feedback=match.user_feedback,
            matched_user_feedback=match.matched_user_feedback,
        )
