"""
Profile sources: where the match job reads its population from.

The job reads the whole population once per run. Users without a profile
or persona come back with profile/persona set to None so the builder can
skip them explicitly.
"""

import logging
from typing import Any, Iterable, List, Optional, Protocol, runtime_checkable

from sqlalchemy.exc import SQLAlchemyError

from core.errors import PopulationFetchError
from core.matcher.models import (
    UserSnapshot, ProfileData, PersonaData, SocialData,
    MatchType, ExperienceLevel, to_string_set, parse_enum
)
from database.database import db_session_scope
from database.repositories.profile import ProfileRepository

logger = logging.getLogger(__name__)


@runtime_checkable
class ProfileSource(Protocol):
    def fetch_all(self) -> List[UserSnapshot]:
        ...

    def exists(self, user_id: Any) -> bool:
        ...


def _float_or_none(value: Any) -> Optional[float]:
    return float(value) if value is not None else None


def _profile_from_row(row: Any) -> Optional[ProfileData]:
    if row.profile_id is None:
        return None
    try:
        return ProfileData(
            headline=row.headline,
            bio=row.bio,
            city=row.city,
            state=row.state,
            country=row.country,
            latitude=_float_or_none(row.latitude),
            longitude=_float_or_none(row.longitude),
            profession=row.profession,
            company=row.company,
            skills=to_string_set(row.skills),
            interests=to_string_set(row.interests),
        )
    except (TypeError, ValueError) as e:
        logger.warning(f"Malformed profile for user {row.user_id}, treating as missing: {e}")
        return None


def _persona_from_row(row: Any) -> Optional[PersonaData]:
    if row.persona_id is None:
        return None
    try:
        return PersonaData(
            match_type=parse_enum(MatchType, row.match_type),
            skills_desired=to_string_set(row.skills_desired),
            industry_preferences=to_string_set(row.industry_preferences),
            experience_level_preference=parse_enum(ExperienceLevel, row.experience_level_preference),
        )
    except (TypeError, ValueError) as e:
        logger.warning(f"Malformed persona for user {row.user_id}, treating as missing: {e}")
        return None


def snapshot_from_row(row: Any) -> UserSnapshot:
    """Build a UserSnapshot from one ProfileRepository.fetch_population_rows() row."""
    return UserSnapshot(
        user_id=row.user_id,
        profile=_profile_from_row(row),
        persona=_persona_from_row(row),
        social=SocialData(declared_industry=row.social_industry),
    )


class SqlProfileSource:
    """Reads snapshots from the relational profile tables."""

    def __init__(self, session_factory=None):
        self.session_factory = session_factory

    def fetch_all(self) -> List[UserSnapshot]:
        """
        Raises:
            PopulationFetchError: if the profile tables cannot be read
        """
        try:
            with db_session_scope(self.session_factory) as session:
                rows = ProfileRepository(session).fetch_population_rows()
                snapshots = [snapshot_from_row(row) for row in rows]
        except SQLAlchemyError as e:
            logger.exception("Failed to fetch population")
            raise PopulationFetchError(f"Failed to fetch population: {e}") from e

        logger.info(f"Fetched {len(snapshots)} user snapshots")
        return snapshots

    def exists(self, user_id: Any) -> bool:
        try:
            with db_session_scope(self.session_factory) as session:
                return ProfileRepository(session).user_exists(user_id)
        except SQLAlchemyError as e:
            logger.exception("Failed to look up user %s", user_id)
            raise PopulationFetchError(f"Failed to look up user {user_id}: {e}") from e


class StaticProfileSource:
    """In-memory source over a fixed population (scripts and tests)."""

    def __init__(self, snapshots: Iterable[UserSnapshot]):
        self._snapshots = list(snapshots)

    def fetch_all(self) -> List[UserSnapshot]:
        return list(self._snapshots)

    def exists(self, user_id: Any) -> bool:
        return any(s.user_id == user_id for s in self._snapshots)
