#!/usr/bin/env python3
"""
Unit tests for MatchRepository against an in-memory database.
"""

import unittest
import uuid
from datetime import datetime

import pytest
from sqlalchemy import select, update

from core.scorer.models import MatchScore
from database.models import Match, MatchStatus
from database.repositories import MatchRepository
from database.uow import match_uow
from tests import create_test_session_factory
from tests.fixtures.users import make_snapshot, seed_users


def _score(overall: float) -> MatchScore:
    return MatchScore(
        skills_alignment=0.4,
        industry_alignment=1.0,
        professional_fit=0.8,
        personal_fit=0.7,
        experience_compatibility=1.0,
        overall=overall,
        details={'skillsOverlap': '0.40'},
    )


@pytest.mark.db
class TestMatchUpsert(unittest.TestCase):

    def setUp(self):
        self.session_factory = create_test_session_factory()
        self.a = make_snapshot()
        self.b = make_snapshot()
        seed_users(self.session_factory, [self.a, self.b])

    def tearDown(self):
        self.session_factory.kw["bind"].dispose()

    def _upsert(self, overall: float):
        with match_uow(self.session_factory) as repo:
            return repo.upsert_match(self.a.user_id, self.b.user_id, _score(overall))

    def _row(self) -> Match:
        session = self.session_factory()
        try:
            return session.execute(
                select(Match).where(Match.user_id == self.a.user_id, Match.matched_user_id == self.b.user_id)
            ).scalar_one()
        finally:
            session.close()

    def test_01_insert_creates_pending(self):
        """A new pair is stored as PENDING with its scores."""
        print("\n📊 UNIT Test 1: Insert new match")

        outcome = self._upsert(0.75)

        self.assertTrue(outcome.created)
        self.assertEqual(outcome.status, MatchStatus.PENDING.value)

        row = self._row()
        self.assertEqual(row.status, 'PENDING')
        self.assertAlmostEqual(row.score_overall, 0.75)
        self.assertAlmostEqual(row.score_professional_fit, 0.8)
        self.assertEqual(row.score_details, {'skillsOverlap': '0.40'})
        self.assertIsNotNone(row.created_at)

        print(f"  ✓ Match {outcome.match_id} created")

    def test_02_rerun_is_idempotent(self):
        """Upserting the same pair twice keeps one row and its id."""
        first = self._upsert(0.75)
        second = self._upsert(0.75)

        self.assertFalse(second.created)
        self.assertEqual(first.match_id, second.match_id)

        with match_uow(self.session_factory) as repo:
            self.assertEqual(repo.count_matches(), 1)

    def test_03_refresh_updates_scores_keeps_created_at(self):
        self._upsert(0.6)
        created_at = self._row().created_at

        self._upsert(0.9)

        row = self._row()
        self.assertAlmostEqual(row.score_overall, 0.9)
        self.assertEqual(row.created_at, created_at)

    def test_03b_refresh_moves_updated_at(self):
        """Every write refreshes updated_at; created_at stays put."""
        first = self._upsert(0.6)
        created_at = self._row().created_at
        backdated = datetime(2020, 1, 1, 0, 0, 0)

        session = self.session_factory()
        try:
            session.execute(
                update(Match).where(Match.id == first.match_id).values(updated_at=backdated)
            )
            session.commit()
        finally:
            session.close()
        self.assertEqual(self._row().updated_at.replace(tzinfo=None), backdated)

        self._upsert(0.7)

        row = self._row()
        self.assertGreater(row.updated_at.replace(tzinfo=None), backdated)
        self.assertEqual(row.created_at, created_at)

    def test_03c_created_reflects_rows_written_elsewhere(self):
        """A row inserted by another writer makes the next upsert an update of that row."""
        session = self.session_factory()
        try:
            existing = Match(
                user_id=self.a.user_id, matched_user_id=self.b.user_id,
                status='PENDING', **_score(0.5).as_columns()
            )
            session.add(existing)
            session.commit()
            existing_id = existing.id
        finally:
            session.close()

        outcome = self._upsert(0.8)

        self.assertFalse(outcome.created)
        self.assertEqual(outcome.match_id, existing_id)

    def test_04_advanced_status_is_preserved(self):
        """Rescoring never resets a status a person or workflow has set."""
        print("\n📊 UNIT Test 4: Status non-regression")

        for status in (MatchStatus.ACCEPTED, MatchStatus.REJECTED, MatchStatus.SCHEDULED,
                       MatchStatus.COMPLETED, MatchStatus.CANCELLED):
            with self.subTest(status=status):
                first = self._upsert(0.6)
                with match_uow(self.session_factory) as repo:
                    repo.set_status(first.match_id, status)

                outcome = self._upsert(0.85)

                self.assertEqual(outcome.status, status.value)
                row = self._row()
                self.assertEqual(row.status, status.value)
                self.assertAlmostEqual(row.score_overall, 0.85)

        print("  ✓ All advanced statuses kept")

    def test_05_pending_stays_pending(self):
        self._upsert(0.6)
        outcome = self._upsert(0.7)
        self.assertEqual(outcome.status, 'PENDING')

    def test_06_directions_are_separate_rows(self):
        self._upsert(0.6)
        with match_uow(self.session_factory) as repo:
            repo.upsert_match(self.b.user_id, self.a.user_id, _score(0.55))
            self.assertEqual(repo.count_matches(), 2)


@pytest.mark.db
class TestMatchQueries(unittest.TestCase):

    def setUp(self):
        self.session_factory = create_test_session_factory()
        self.users = [make_snapshot() for _ in range(4)]
        seed_users(self.session_factory, self.users)
        subject = self.users[0].user_id
        with match_uow(self.session_factory) as repo:
            for other, overall in zip(self.users[1:], (0.6, 0.9, 0.75)):
                repo.upsert_match(subject, other.user_id, _score(overall))

    def tearDown(self):
        self.session_factory.kw["bind"].dispose()

    def test_matches_ordered_by_overall_desc(self):
        session = self.session_factory()
        try:
            matches = MatchRepository(session).get_matches_for_user(self.users[0].user_id)
        finally:
            session.close()

        self.assertEqual([round(m.score_overall, 2) for m in matches], [0.9, 0.75, 0.6])

    def test_status_filter(self):
        session = self.session_factory()
        try:
            repo = MatchRepository(session)
            target = repo.get_match(self.users[0].user_id, self.users[2].user_id)
            repo.set_status(target.id, MatchStatus.ACCEPTED)
            session.commit()

            accepted = repo.get_matches_for_user(self.users[0].user_id, status='ACCEPTED')
            pending = repo.get_matches_for_user(self.users[0].user_id, status='PENDING')
        finally:
            session.close()

        self.assertEqual([m.matched_user_id for m in accepted], [self.users[2].user_id])
        self.assertEqual(len(pending), 2)

    def test_set_status_unknown_match(self):
        with match_uow(self.session_factory) as repo:
            self.assertEqual(repo.set_status(uuid.uuid4(), MatchStatus.ACCEPTED), 0)

    def test_matched_user_view_unaffected(self):
        """Other users have no rows until they are the subject."""
        session = self.session_factory()
        try:
            repo = MatchRepository(session)
            self.assertEqual(repo.get_matches_for_user(self.users[1].user_id), [])
        finally:
            session.close()


if __name__ == '__main__':
    unittest.main()
