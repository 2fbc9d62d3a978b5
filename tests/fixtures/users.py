"""
Synthetic users for scorer, builder, repository and runner tests.
"""

import random
import uuid
from typing import Iterable, List, Optional

from core.matcher.models import (
    UserSnapshot, ProfileData, PersonaData, SocialData, MatchType, ExperienceLevel
)
from database.models import User, UserProfile, IdealPersona, SocialProfile

SKILL_POOL = [
    "python", "sql", "aws", "docker", "react", "go", "java", "rust",
    "kubernetes", "figma", "marketing", "sales", "finance", "ml", "typescript",
]
INDUSTRIES = ["Software", "Finance", "Healthcare", "Education", "Retail"]
PROFESSIONS = ["Engineer", "Designer", "Product Manager", "Analyst", "Founder"]
CITIES = [
    ("Austin", "TX", 30.2672, -97.7431),
    ("Round Rock", "TX", 30.5083, -97.6789),
    ("Boston", "MA", 42.3601, -71.0589),
    ("Cambridge", "MA", 42.3736, -71.1097),
    ("Denver", "CO", 39.7392, -104.9903),
]


def make_snapshot(
    user_id=None,
    skills: Iterable[str] = (),
    skills_desired: Iterable[str] = (),
    industry_preferences: Iterable[str] = (),
    match_type: Optional[MatchType] = MatchType.MIRROR,
    experience: Optional[ExperienceLevel] = ExperienceLevel.ANY,
    profession: Optional[str] = None,
    city: Optional[str] = None,
    state: Optional[str] = None,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    industry: Optional[str] = None,
    with_profile: bool = True,
    with_persona: bool = True,
) -> UserSnapshot:
    profile = ProfileData(
        city=city,
        state=state,
        latitude=latitude,
        longitude=longitude,
        profession=profession,
        skills=frozenset(skills),
    ) if with_profile else None
    persona = PersonaData(
        match_type=match_type,
        skills_desired=frozenset(skills_desired),
        industry_preferences=frozenset(industry_preferences),
        experience_level_preference=experience,
    ) if with_persona else None
    return UserSnapshot(
        user_id=user_id or uuid.uuid4(),
        profile=profile,
        persona=persona,
        social=SocialData(declared_industry=industry),
    )


def synthetic_population(count: int, seed: int = 42) -> List[UserSnapshot]:
    """Deterministic population of complete users."""
    rng = random.Random(seed)
    users = []
    for _ in range(count):
        city, state, lat, lon = rng.choice(CITIES)
        users.append(make_snapshot(
            user_id=uuid.UUID(int=rng.getrandbits(128)),
            skills=rng.sample(SKILL_POOL, rng.randint(2, 6)),
            skills_desired=rng.sample(SKILL_POOL, rng.randint(0, 4)),
            industry_preferences=rng.sample(INDUSTRIES, rng.randint(1, 3)),
            match_type=rng.choice(list(MatchType)),
            experience=rng.choice(list(ExperienceLevel)),
            profession=rng.choice(PROFESSIONS),
            city=city,
            state=state,
            latitude=lat,
            longitude=lon,
            industry=rng.choice(INDUSTRIES),
        ))
    return users


def seed_users(session_factory, snapshots: Iterable[UserSnapshot]) -> None:
    """Write snapshots into the users/profile/persona/social tables."""
    session = session_factory()
    try:
        for i, snap in enumerate(snapshots):
            user = User(id=snap.user_id, email=f"user{i}-{snap.user_id}@example.com", is_active=True)
            if snap.profile is not None:
                user.profile = UserProfile(
                    city=snap.profile.city,
                    state=snap.profile.state,
                    latitude=snap.profile.latitude,
                    longitude=snap.profile.longitude,
                    profession=snap.profile.profession,
                    skills=sorted(snap.profile.skills),
                    interests=sorted(snap.profile.interests),
                )
            if snap.persona is not None:
                user.persona = IdealPersona(
                    match_type=snap.persona.match_type.value if snap.persona.match_type else None,
                    skills_desired=sorted(snap.persona.skills_desired),
                    industry_preferences=sorted(snap.persona.industry_preferences),
                    experience_level_preference=(
                        snap.persona.experience_level_preference.value
                        if snap.persona.experience_level_preference else None
                    ),
                )
            if snap.social.declared_industry is not None:
                user.social = SocialProfile(industry=snap.social.declared_industry)
            session.add(user)
        session.commit()
    finally:
        session.close()
