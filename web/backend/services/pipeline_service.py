#!/usr/bin/env python3
"""
Pipeline service - runs match recomputes on request.

Recomputes run synchronously inside the request, the way the scheduler runs
them; the HTTP response carries the job result.
"""

import logging

from core.errors import InvalidUserIdError, UserNotFoundError, PopulationFetchError
from pipeline import MatchJobRunner, MatchJobResult, PipelineLockedError
from ..models.responses import MatchJobResponse
from ..exceptions import (
    ServiceException,
    InvalidIdentifierException,
    UserNotFoundException,
    PipelineLockedException
)

logger = logging.getLogger(__name__)


def _to_response(result: MatchJobResult, message: str) -> MatchJobResponse:
    return MatchJobResponse(message=message, **result.to_dict())


class PipelineService:
    """Translates runner outcomes into API responses and service errors."""

    def __init__(self, runner: MatchJobRunner):
        self.runner = runner

    def calculate_for_user(self, user_id: str) -> MatchJobResponse:
        """
        Raises:
            InvalidIdentifierException: malformed user id
            UserNotFoundException: unknown user
            ServiceException: population could not be read
        """
        try:
            result = self.runner.recompute_for_user(user_id)
        except InvalidUserIdError as e:
            raise InvalidIdentifierException(str(e)) from e
        except UserNotFoundError as e:
            raise UserNotFoundException(str(e)) from e
        except PopulationFetchError as e:
            raise ServiceException(str(e)) from e

        return _to_response(
            result,
            f"Successfully calculated {result.written_count} matches for user"
            if result.success else
            f"Calculated matches for user with errors: {result.error}"
        )

    def calculate_for_population(self) -> MatchJobResponse:
        """
        Raises:
            PipelineLockedException: another population run is in progress
            ServiceException: population could not be read
        """
        try:
            result = self.runner.recompute_for_population(source="api")
        except PipelineLockedError as e:
            raise PipelineLockedException(f"{e}. Please try again later.") from e
        except PopulationFetchError as e:
            raise ServiceException(str(e)) from e

        return _to_response(
            result,
            f"Successfully calculated {result.written_count} matches"
            if result.success else
            f"Calculated matches with errors: {result.error}"
        )
