"""Matcher Module - population snapshots and pair building."""
from core.matcher.models import (
    UserSnapshot, ProfileData, PersonaData, SocialData,
    MatchType, ExperienceLevel
)
from core.matcher.profile_source import ProfileSource, SqlProfileSource, StaticProfileSource

__all__ = [
    'UserSnapshot', 'ProfileData', 'PersonaData', 'SocialData',
    'MatchType', 'ExperienceLevel',
    'ProfileSource', 'SqlProfileSource', 'StaticProfileSource',
]
