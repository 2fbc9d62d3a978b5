"""Shared match job runner module.

This module contains the match scoring job that is used by main.py
(scheduler and CLI) and by the web application (manual triggers).

A run is: read the population once, score every subject against every
other user, then upsert the pairs that clear the threshold one
transaction at a time.
"""

import time
import logging
import threading
from typing import Any, Optional, Collection
from dataclasses import dataclass, field

from core.config_loader import MatchingConfig
from core.errors import UserNotFoundError
from core.matcher import ProfileSource, SqlProfileSource
from core.matcher.builder import MatchSetBuilder
from core.scorer.persistence import MatchWriter
from core.utils import parse_user_id
from pipeline.control import PipelineController


logger = logging.getLogger(__name__)


@dataclass
class MatchJobResult:
    """Result of one match job run."""
    success: bool
    created_count: int = 0
    updated_count: int = 0
    failed_count: int = 0
    skipped_pairs: int = 0
    pairs_evaluated: int = 0
    interrupted: bool = False
    error: Optional[str] = None
    execution_time: float = 0.0
    failed_pairs: list = field(default_factory=list)

    @property
    def written_count(self) -> int:
        return self.created_count + self.updated_count

    def to_dict(self) -> dict:
        return {
            'success': self.success,
            'created_count': self.created_count,
            'updated_count': self.updated_count,
            'written_count': self.written_count,
            'failed_count': self.failed_count,
            'skipped_pairs': self.skipped_pairs,
            'pairs_evaluated': self.pairs_evaluated,
            'interrupted': self.interrupted,
            'error': self.error,
            'execution_time': round(self.execution_time, 3),
        }


class MatchJobRunner:
    """
    Runs the match scoring job for a single user or for the whole population.

    Both entry points share the same flow; a single-user run only restricts
    the subjects, candidates are still the whole population.
    """

    def __init__(
        self,
        config: MatchingConfig,
        profile_source: Optional[ProfileSource] = None,
        session_factory=None,
        controller: Optional[PipelineController] = None,
        writer: Optional[MatchWriter] = None
    ):
        self.config = config
        self.profile_source = profile_source or SqlProfileSource(session_factory)
        self.controller = controller
        self.builder = MatchSetBuilder(config)
        self.writer = writer or MatchWriter(
            retry_config=config.retry,
            session_factory=session_factory,
            max_workers=config.write_workers,
        )

    def recompute_for_user(
        self,
        user_id: Any,
        stop_event: Optional[threading.Event] = None
    ) -> MatchJobResult:
        """Recompute and persist matches where user_id is the subject.

        Raises:
            InvalidUserIdError: if user_id is not a UUID
            UserNotFoundError: if no such user exists (nothing is computed)
            PopulationFetchError: if the population cannot be read
        """
        uid = parse_user_id(user_id)
        if not self.profile_source.exists(uid):
            raise UserNotFoundError(uid)

        logger.info(f"Recomputing matches for user {uid}")
        return self._run(f"USER {uid}", subject_ids={uid}, stop_event=stop_event)

    def recompute_for_population(
        self,
        stop_event: Optional[threading.Event] = None,
        source: str = "cli"
    ) -> MatchJobResult:
        """Recompute and persist matches for every user.

        Raises:
            PipelineLockedError: if another population run holds the lock
            PopulationFetchError: if the population cannot be read
        """
        if self.controller is None:
            return self._run("POPULATION", stop_event=stop_event)

        with self.controller.hold(source):
            return self._run("POPULATION", stop_event=stop_event)

    def _run(
        self,
        label: str,
        subject_ids: Optional[Collection[Any]] = None,
        stop_event: Optional[threading.Event] = None
    ) -> MatchJobResult:
        if stop_event is None:
            stop_event = threading.Event()

        run_start = time.time()

        logger.info("=" * 60)
        logger.info(f"STARTING MATCH JOB ({label})")
        logger.info("=" * 60)

        if not self.config.enabled:
            logger.info("=== MATCH JOB: Skipped (disabled in config) ===")
            return MatchJobResult(success=True)

        deadline = None
        if self.config.run_timeout_seconds is not None:
            deadline = time.monotonic() + self.config.run_timeout_seconds

        # Step 1: Read. A failure here is fatal and nothing is written.
        step_start = time.time()
        logger.info("=== MATCH JOB STEP 1: Reading Population ===")
        population = tuple(self.profile_source.fetch_all())
        logger.info(f"STEP 1 completed: {len(population)} users in {time.time() - step_start:.2f}s")

        # Step 2: Compute
        step_start = time.time()
        logger.info("=== MATCH JOB STEP 2: Scoring Pairs ===")
        built = self.builder.build(
            population,
            subject_ids=subject_ids,
            stop_event=stop_event,
            deadline=deadline,
        )
        logger.info(
            f"STEP 2 completed: {len(built.matches)} matches above threshold "
            f"from {built.pairs_evaluated} pairs in {time.time() - step_start:.2f}s"
        )

        # Step 3: Write
        step_start = time.time()
        logger.info("=== MATCH JOB STEP 3: Saving Matches ===")
        report = self.writer.save_all(built.matches, stop_event=stop_event)
        logger.info(
            f"STEP 3 completed: created={report.created_count}, updated={report.updated_count}, "
            f"failed={report.failed_count} in {time.time() - step_start:.2f}s"
        )

        interrupted = built.interrupted or built.timed_out or stop_event.is_set()
        unsaved = len(built.matches) - report.written_count - report.failed_count

        error = None
        if built.timed_out:
            error = f"Run timed out after {self.config.run_timeout_seconds}s"
        elif interrupted:
            error = "Run interrupted"
        elif report.failed_count:
            error = f"{report.failed_count} matches failed to save"
        elif built.pairs_failed:
            error = f"{built.pairs_failed} pairs failed to score"
        if unsaved > 0:
            logger.warning(f"{unsaved} matches were computed but not saved")

        execution_time = time.time() - run_start
        result = MatchJobResult(
            success=error is None,
            created_count=report.created_count,
            updated_count=report.updated_count,
            failed_count=report.failed_count + built.pairs_failed,
            skipped_pairs=built.pairs_skipped,
            pairs_evaluated=built.pairs_evaluated,
            interrupted=interrupted,
            error=error,
            execution_time=execution_time,
            failed_pairs=list(report.failed_pairs),
        )

        logger.info("=" * 60)
        logger.info(
            f"MATCH JOB COMPLETED in {execution_time:.2f}s "
            f"(success={result.success}, written={result.written_count}, failed={result.failed_count})"
        )
        logger.info("=" * 60)
        return result
