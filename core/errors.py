"""
Errors raised by the match scoring job.

Per-pair data problems are never raised: the builder skips and logs them.
Only input errors and fatal errors reach the caller.
"""


class MatchEngineError(Exception):
    """Base exception for match engine errors."""
    pass


class InvalidUserIdError(MatchEngineError):
    """Raised when a user identifier is malformed."""
    pass


class UserNotFoundError(MatchEngineError):
    """Raised when the target of a single-user recompute does not exist."""

    def __init__(self, user_id):
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id


class PopulationFetchError(MatchEngineError):
    """Raised when the population snapshot cannot be read. Nothing is written."""
    pass
