"""
MatchSetBuilder - pairs every subject with every other user and keeps the
pairs that clear the threshold.

Pairs are directional: (A, B) and (B, A) are scored independently and may
both be kept with different scores. No reverse-pair dedup is done here.
"""

import time
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Collection, List, Optional, Sequence

from core.config_loader import MatchingConfig
from core.matcher.models import UserSnapshot
from core.scorer.compatibility import score_compatibility
from core.scorer.models import ScoredPair

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Matches that cleared the threshold plus counters for the run report."""
    matches: List[ScoredPair] = field(default_factory=list)
    subjects_processed: int = 0
    pairs_evaluated: int = 0
    pairs_skipped: int = 0
    pairs_failed: int = 0
    pairs_below_threshold: int = 0
    interrupted: bool = False
    timed_out: bool = False


class MatchSetBuilder:
    """
    Builds the set of match candidates for a population snapshot.

    Pure computation: no I/O, no suspension. Cancellation and the wall-clock
    deadline are checked between subjects only.
    """

    def __init__(self, config: MatchingConfig):
        self.config = config

    def _select_subjects(
        self,
        population: Sequence[UserSnapshot],
        subject_ids: Optional[Collection[Any]]
    ) -> List[UserSnapshot]:
        if subject_ids is None:
            return list(population)
        wanted = set(subject_ids)
        return [user for user in population if user.user_id in wanted]

    def build(
        self,
        population: Sequence[UserSnapshot],
        subject_ids: Optional[Collection[Any]] = None,
        stop_event: Optional[threading.Event] = None,
        deadline: Optional[float] = None
    ) -> BuildResult:
        """Score subjects against the whole population.

        Args:
            population: Immutable snapshot of all users for this run
            subject_ids: Restrict subjects to these ids (None = everyone)
            stop_event: Optional event to stop between subjects
            deadline: Optional time.monotonic() value after which to stop

        Returns:
            BuildResult with the kept matches and run counters
        """
        threshold = self.config.threshold
        weights = self.config.weights
        result = BuildResult()

        for subject in self._select_subjects(population, subject_ids):
            if stop_event is not None and stop_event.is_set():
                logger.warning("Match building interrupted after %d subjects", result.subjects_processed)
                result.interrupted = True
                break
            if deadline is not None and time.monotonic() >= deadline:
                logger.warning("Match building timed out after %d subjects", result.subjects_processed)
                result.timed_out = True
                break

            result.subjects_processed += 1

            if not subject.is_complete:
                logger.warning(f"Skipping user {subject.user_id} due to missing persona or profile data.")
                result.pairs_skipped += sum(1 for c in population if c.user_id != subject.user_id)
                continue

            for candidate in population:
                if candidate.user_id == subject.user_id:
                    continue

                if not candidate.is_complete:
                    logger.warning(
                        "Skipping pair %s -> %s: candidate has no persona or profile",
                        subject.user_id, candidate.user_id
                    )
                    result.pairs_skipped += 1
                    continue

                result.pairs_evaluated += 1
                try:
                    score = score_compatibility(subject, candidate, weights)
                except Exception:
                    logger.exception(
                        "Failed scoring pair subject=%s candidate=%s", subject.user_id, candidate.user_id
                    )
                    result.pairs_failed += 1
                    continue

                if score.overall >= threshold:
                    result.matches.append(ScoredPair(
                        user_id=subject.user_id,
                        matched_user_id=candidate.user_id,
                        score=score,
                    ))
                else:
                    result.pairs_below_threshold += 1

        logger.info(
            f"Built {len(result.matches)} matches from {result.pairs_evaluated} pairs "
            f"(skipped={result.pairs_skipped}, failed={result.pairs_failed}, threshold={threshold})"
        )
        return result
