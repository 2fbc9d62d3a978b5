import enum
import uuid

from sqlalchemy import (
    Column, Text, Float, Integer, TIMESTAMP, ForeignKey, UniqueConstraint,
    CheckConstraint, Index, Uuid, func
)
from sqlalchemy.orm import relationship

from .base import Base, JSONType


class MatchStatus(str, enum.Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    SCHEDULED = "SCHEDULED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


# Statuses set by a person or a downstream workflow. Rescoring never resets them.
ADVANCED_STATUSES = tuple(
    s.value for s in MatchStatus if s is not MatchStatus.PENDING
)


class Match(Base):
    """
    A directional match: how well matched_user fits what user is looking for.

    The scoring job creates rows as PENDING and afterwards only refreshes
    the score columns. scheduled_time and the feedback columns belong to
    downstream workflows.
    """
    __tablename__ = 'matches'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    matched_user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)

    status = Column(Text, nullable=False, default=MatchStatus.PENDING.value)

    score_overall = Column(Float, nullable=False)
    score_professional_fit = Column(Float, nullable=False)
    score_personal_fit = Column(Float, nullable=False)
    score_skills_alignment = Column(Float, nullable=False)
    score_industry_alignment = Column(Float, nullable=False)
    score_experience_compatibility = Column(Float, nullable=False)
    score_details = Column(JSONType, default=dict)

    scheduled_time = Column(TIMESTAMP(timezone=True))
    user_feedback = Column(Integer)
    matched_user_feedback = Column(Integer)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    user = relationship("User", foreign_keys=[user_id])
    matched_user = relationship("User", foreign_keys=[matched_user_id])

    __table_args__ = (
        UniqueConstraint('user_id', 'matched_user_id', name='uq_matches_user_matched_user'),
        CheckConstraint('user_id <> matched_user_id', name='ck_matches_different_users'),
        CheckConstraint(
            "status IN ('PENDING', 'ACCEPTED', 'REJECTED', 'SCHEDULED', 'COMPLETED', 'CANCELLED')",
            name='ck_matches_status'
        ),
        CheckConstraint('score_overall >= 0 AND score_overall <= 1', name='ck_matches_score_overall'),
        CheckConstraint('user_feedback >= 1 AND user_feedback <= 5', name='ck_matches_user_feedback'),
        CheckConstraint('matched_user_feedback >= 1 AND matched_user_feedback <= 5', name='ck_matches_matched_user_feedback'),
        Index('idx_matches_user_status', 'user_id', 'status'),
        Index('idx_matches_matched_user_status', 'matched_user_id', 'status'),
        Index('idx_matches_score_overall', 'score_overall'),
    )
