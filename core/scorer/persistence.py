#!/usr/bin/env python3
"""
Persistence Operations - writing scored pairs to the matches table.

Each pair is written in its own transaction through the atomic upsert in
MatchRepository. Transient database errors are retried with bounded
exponential backoff; a pair that still fails is logged and counted, and
the remaining pairs are still written.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Any

from sqlalchemy.exc import DBAPIError, OperationalError
from tenacity import (
    Retrying,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception,
    before_sleep_log
)

from core.config_loader import RetryConfig
from core.scorer.models import ScoredPair
from database.repositories import UpsertOutcome
from database.uow import match_uow

logger = logging.getLogger(__name__)

# Marks a pair skipped because the run was stopped before its write started
_NOT_ATTEMPTED = object()


def _is_retryable_error(exc: BaseException) -> bool:
    """
    Retry on connectivity problems and on errors the driver marks as
    transient (lost connection, serialization failure, deadlock).

    Does NOT retry on integrity errors or programming errors.
    """
    if isinstance(exc, OperationalError):
        return True
    if isinstance(exc, DBAPIError):
        return bool(getattr(exc, 'connection_invalidated', False))
    return False


@dataclass
class SaveReport:
    created_count: int = 0
    updated_count: int = 0
    failed_count: int = 0
    failed_pairs: List[Tuple[Any, Any]] = field(default_factory=list)

    @property
    def written_count(self) -> int:
        return self.created_count + self.updated_count


class MatchWriter:
    """Writes ScoredPairs one transaction at a time."""

    def __init__(
        self,
        retry_config: Optional[RetryConfig] = None,
        session_factory=None,
        max_workers: int = 1
    ):
        self.retry_config = retry_config or RetryConfig()
        self.session_factory = session_factory
        self.max_workers = max(1, max_workers)

    def _retrying(self) -> Retrying:
        cfg = self.retry_config
        return Retrying(
            retry=retry_if_exception(_is_retryable_error),
            wait=wait_exponential(multiplier=cfg.min_wait_seconds, min=cfg.min_wait_seconds, max=cfg.max_wait_seconds),
            stop=stop_after_attempt(cfg.max_attempts),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )

    def save_pair(self, pair: ScoredPair) -> UpsertOutcome:
        """
        Upsert a single pair, retrying transient failures.

        Raises:
            Exception: the last error once retries are exhausted
        """
        for attempt in self._retrying():
            with attempt:
                with match_uow(self.session_factory) as repo:
                    outcome = repo.upsert_match(pair.user_id, pair.matched_user_id, pair.score)

        logger.debug(
            f"Saved match {pair.user_id} -> {pair.matched_user_id}: "
            f"overall={pair.score.overall:.3f}, status={outcome.status}, created={outcome.created}"
        )
        return outcome

    def _record(self, report: SaveReport, pair: ScoredPair, outcome: Optional[UpsertOutcome]) -> None:
        if outcome is None:
            report.failed_count += 1
            report.failed_pairs.append((pair.user_id, pair.matched_user_id))
        elif outcome.created:
            report.created_count += 1
        else:
            report.updated_count += 1

    def _save_or_log(self, pair: ScoredPair) -> Optional[UpsertOutcome]:
        try:
            return self.save_pair(pair)
        except Exception:
            logger.exception(
                "Failed saving match user_id=%s matched_user_id=%s", pair.user_id, pair.matched_user_id
            )
            return None

    def _save_unless_stopped(self, pair: ScoredPair, stop_event: Optional[threading.Event]):
        if stop_event is not None and stop_event.is_set():
            return _NOT_ATTEMPTED
        return self._save_or_log(pair)

    def save_all(
        self,
        pairs: List[ScoredPair],
        stop_event: Optional[threading.Event] = None
    ) -> SaveReport:
        """
        Save pairs with per-pair transactions. Order between pairs is not guaranteed.

        Once stop_event is set no further pair is attempted; writes already
        in flight finish and are counted.
        """
        report = SaveReport()

        if self.max_workers == 1:
            for pair in pairs:
                if stop_event is not None and stop_event.is_set():
                    logger.warning("Saving interrupted; %d pairs not written", len(pairs) - report.written_count - report.failed_count)
                    break
                self._record(report, pair, self._save_or_log(pair))
            return report

        not_attempted = 0
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_pair = {
                executor.submit(self._save_unless_stopped, pair, stop_event): pair
                for pair in pairs
            }
            for future in as_completed(future_to_pair):
                outcome = future.result()
                if outcome is _NOT_ATTEMPTED:
                    not_attempted += 1
                    continue
                self._record(report, future_to_pair[future], outcome)

        if not_attempted:
            logger.warning("Saving interrupted; %d pairs not written", not_attempted)
        return report
