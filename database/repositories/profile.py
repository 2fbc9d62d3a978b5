import logging
from typing import Any, List

from sqlalchemy import select, exists

from database.models import User, UserProfile, IdealPersona, SocialProfile
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class ProfileRepository(BaseRepository):
    """Read-only access to the profile, persona and social tables."""

    def fetch_population_rows(self) -> List[Any]:
        """
        One row per user with whatever profile/persona/social data exists.

        Outer joins keep users without a profile or persona; their columns
        come back as NULL so the caller can tell "missing" from "empty".
        """
        stmt = (
            select(
                User.id.label('user_id'),
                UserProfile.id.label('profile_id'),
                UserProfile.headline,
                UserProfile.bio,
                UserProfile.city,
                UserProfile.state,
                UserProfile.country,
                UserProfile.latitude,
                UserProfile.longitude,
                UserProfile.profession,
                UserProfile.company,
                UserProfile.skills,
                UserProfile.interests,
                IdealPersona.id.label('persona_id'),
                IdealPersona.match_type,
                IdealPersona.skills_desired,
                IdealPersona.industry_preferences,
                IdealPersona.experience_level_preference,
                SocialProfile.industry.label('social_industry'),
            )
            .select_from(User)
            .outerjoin(UserProfile, UserProfile.user_id == User.id)
            .outerjoin(IdealPersona, IdealPersona.user_id == User.id)
            .outerjoin(SocialProfile, SocialProfile.user_id == User.id)
            .where(User.is_active.is_(True))
            .order_by(User.created_at, User.id)
        )
        return self.db.execute(stmt).all()

    def user_exists(self, user_id: Any) -> bool:
        stmt = select(exists().where(User.id == user_id))
        return bool(self.db.execute(stmt).scalar())
