"""
Snapshot models for the match scoring job.

A UserSnapshot is rebuilt from the profile store on every run and is
treated as immutable for the duration of that run.
"""

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, FrozenSet, Iterable, Optional

logger = logging.getLogger(__name__)


class MatchType(str, enum.Enum):
    COMPLEMENT = "COMPLEMENT"
    MIRROR = "MIRROR"


class ExperienceLevel(str, enum.Enum):
    ENTRY_LEVEL = "ENTRY_LEVEL"
    MID_LEVEL = "MID_LEVEL"
    SENIOR = "SENIOR"
    EXECUTIVE = "EXECUTIVE"
    ANY = "ANY"


def to_string_set(values: Optional[Iterable[Any]]) -> FrozenSet[str]:
    """Normalize a JSON list column into a frozenset of strings.

    Raises:
        TypeError: if the value is not a list-like collection
    """
    if values is None:
        return frozenset()
    if isinstance(values, (str, bytes, dict)):
        raise TypeError(f"Expected a list of strings, got {type(values).__name__}")
    return frozenset(str(v) for v in values if v is not None)


def parse_enum(enum_cls, value: Any):
    """Map a raw column value onto an enum member, or None if unknown."""
    if value is None:
        return None
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).upper())
    except ValueError:
        logger.debug(f"Unknown {enum_cls.__name__} value: {value!r}")
        return None


@dataclass(frozen=True)
class ProfileData:
    headline: Optional[str] = None
    bio: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    profession: Optional[str] = None
    company: Optional[str] = None
    skills: FrozenSet[str] = field(default_factory=frozenset)
    interests: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


@dataclass(frozen=True)
class PersonaData:
    match_type: Optional[MatchType] = None
    skills_desired: FrozenSet[str] = field(default_factory=frozenset)
    industry_preferences: FrozenSet[str] = field(default_factory=frozenset)
    experience_level_preference: Optional[ExperienceLevel] = None


@dataclass(frozen=True)
class SocialData:
    declared_industry: Optional[str] = None


@dataclass(frozen=True)
class UserSnapshot:
    """One user's profile, persona and social signals at fetch time.

    profile and persona are None when the user has not provided them;
    they are never filled with defaults.
    """
    user_id: Any
    profile: Optional[ProfileData] = None
    persona: Optional[PersonaData] = None
    social: SocialData = field(default_factory=SocialData)

    @property
    def is_complete(self) -> bool:
        return self.profile is not None and self.persona is not None
