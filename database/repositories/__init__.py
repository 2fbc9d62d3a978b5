from database.repositories.base import BaseRepository
from database.repositories.match import MatchRepository, UpsertOutcome
from database.repositories.profile import ProfileRepository

__all__ = [
    'BaseRepository',
    'MatchRepository',
    'UpsertOutcome',
    'ProfileRepository',
]
