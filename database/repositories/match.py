import logging
from dataclasses import dataclass
from typing import List, Optional, Any
import uuid

from sqlalchemy import select, update, case, func
from sqlalchemy.orm import joinedload

from database.models import Match, MatchStatus, User, ADVANCED_STATUSES
from database.repositories.base import BaseRepository
from core.scorer.models import MatchScore

logger = logging.getLogger(__name__)


@dataclass
class UpsertOutcome:
    """What a single upsert did to the matches table."""
    match_id: Any
    status: str
    created: bool


def _insert_for_dialect(dialect_name: str):
    if dialect_name == 'postgresql':
        from sqlalchemy.dialects.postgresql import insert
    elif dialect_name == 'sqlite':
        from sqlalchemy.dialects.sqlite import insert
    else:
        raise NotImplementedError(f"Atomic match upsert is not supported on {dialect_name}")
    return insert


class MatchRepository(BaseRepository):
    def upsert_match(
        self,
        user_id: Any,
        matched_user_id: Any,
        score: MatchScore
    ) -> UpsertOutcome:
        """
        Insert or refresh the (user_id, matched_user_id) match in one statement.

        New rows start PENDING. On conflict only the score columns and
        updated_at change; an advanced status (ACCEPTED, SCHEDULED, ...)
        is kept as is. created_at is never touched after insert.

        created is read from the statement itself: a conflicting row keeps
        its own id, so the returned id equals the proposed one only when
        this call inserted the row.
        """
        columns = score.as_columns()
        insert = _insert_for_dialect(self.dialect_name)
        new_id = uuid.uuid4()

        stmt = insert(Match).values(
            id=new_id,
            user_id=user_id,
            matched_user_id=matched_user_id,
            status=MatchStatus.PENDING.value,
            created_at=func.now(),
            updated_at=func.now(),
            **columns
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=['user_id', 'matched_user_id'],
            set_={
                'status': case(
                    (Match.status.in_(ADVANCED_STATUSES), Match.status),
                    else_=MatchStatus.PENDING.value
                ),
                **{name: stmt.excluded[name] for name in columns},
                'updated_at': func.now(),
            }
        ).returning(Match.id, Match.status)

        row = self.db.execute(stmt).one()

        return UpsertOutcome(
            match_id=row.id,
            status=row.status,
            created=row.id == new_id,
        )

    def get_match(
        self,
        user_id: Any,
        matched_user_id: Any
    ) -> Optional[Match]:
        """One directional match with both users and their profiles loaded."""
        stmt = select(Match).where(
            Match.user_id == user_id,
            Match.matched_user_id == matched_user_id
        ).options(
            joinedload(Match.user).joinedload(User.profile),
            joinedload(Match.matched_user).joinedload(User.profile),
        )
        return self.db.execute(stmt).unique().scalar_one_or_none()

    def get_matches_for_user(
        self,
        user_id: Any,
        status: Optional[str] = None
    ) -> List[Match]:
        stmt = (
            select(Match)
            .where(Match.user_id == user_id)
            .options(joinedload(Match.matched_user).joinedload(User.profile))
        )

        if status is not None:
            stmt = stmt.where(Match.status == status)

        stmt = stmt.order_by(Match.score_overall.desc())
        return self.db.execute(stmt).unique().scalars().all()

    def set_status(self, match_id: Any, status: MatchStatus) -> int:
        """Explicit status change on behalf of a user."""
        result = self.db.execute(
            update(Match)
            .where(Match.id == match_id)
            .values(status=status.value, updated_at=func.now())
        )
        if result.rowcount:
            logger.info(f"Match {match_id} set to {status.value}")
        return result.rowcount

    def count_matches(self) -> int:
        return self.db.execute(select(func.count()).select_from(Match)).scalar_one()
