#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

from typing import Generator
from functools import lru_cache
from sqlalchemy.orm import Session

from database.database import create_session_factory
from pipeline import MatchJobRunner, PipelineController
from .config import get_config


@lru_cache()
def get_session_factory():
    """Session factory shared by request sessions and the job runner."""
    database = get_config().database
    return create_session_factory(database.url, database.pool_pre_ping)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a database session.

    Usage:
        @app.get("/endpoint")
        def my_endpoint(db: Session = Depends(get_db)):
            ...

    Yields:
        Session: Database session that will be automatically closed.
    """
    session = get_session_factory()()
    try:
        yield session
    finally:
        session.close()


def get_match_job_runner() -> MatchJobRunner:
    """Build a runner for manual triggers; population runs share the scheduler's lock."""
    return MatchJobRunner(
        get_config().matching,
        session_factory=get_session_factory(),
        controller=PipelineController(),
    )
