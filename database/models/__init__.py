from .base import Base
from .user import User, UserProfile, IdealPersona, SocialProfile
from .match import Match, MatchStatus, ADVANCED_STATUSES

__all__ = [
    'Base',
    'User',
    'UserProfile',
    'IdealPersona',
    'SocialProfile',
    'Match',
    'MatchStatus',
    'ADVANCED_STATUSES',
]
