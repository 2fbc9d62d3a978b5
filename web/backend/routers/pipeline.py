#!/usr/bin/env python3
"""
Pipeline endpoints - trigger match recomputes.
"""

import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from pipeline import MatchJobRunner
from ..dependencies import get_match_job_runner
from ..services.pipeline_service import PipelineService
from ..models.responses import MatchJobResponse

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)

router = APIRouter(prefix="/api/matches", tags=["pipeline"])


def add_rate_limit_handlers(app):
    """Add rate limit exception handlers to the FastAPI app."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


async def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "error": str(exc),
            "type": "RateLimitExceeded"
        }
    )


@router.post("/calculate", response_model=MatchJobResponse)
@limiter.limit("5/minute")
def calculate_population_matches(
    request: Request,
    runner: MatchJobRunner = Depends(get_match_job_runner)
):
    """
    Recompute matches for every user.

    Runs synchronously and returns the job result. Responds 409 when a
    scheduled or manual population run is already in progress.
    """
    logger.info("Population recompute requested")
    return PipelineService(runner).calculate_for_population()


@router.post("/calculate/{user_id}", response_model=MatchJobResponse)
@limiter.limit("30/minute")
def calculate_user_matches(
    request: Request,
    user_id: str,
    runner: MatchJobRunner = Depends(get_match_job_runner)
):
    """
    Recompute the matches where user_id is the subject.

    Every other user is still considered as a candidate.
    """
    logger.info(f"Recompute requested for user {user_id}")
    return PipelineService(runner).calculate_for_user(user_id)
