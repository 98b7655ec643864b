"""Tests for notefeed.storage.feedback module."""

from __future__ import annotations

import pytest
from sqlalchemy.orm import Session

from notefeed.model import FeedbackID
from notefeed.storage import feedback as feedback_storage


class TestGet(object):
    """Tests for feedback_storage.get()."""

    def test_get_nonexistent_returns_none(self, db_session: Session) -> None:
        with db_session.begin():
            result = feedback_storage.get(404, session=db_session)

        assert result is None

    def test_get_by_grade_id(self, db_session: Session) -> None:
        with db_session.begin():
            feedback_storage.upsert(1, assignment_id=10, file_count=1, session=db_session)

        with db_session.begin():
            result = feedback_storage.get(1, session=db_session)

        assert result is not None
        assert isinstance(result.feedback_id, FeedbackID)
        assert result.grade_id == 1
        assert result.assignment_id == 10
        assert result.file_count == 1


class TestUpsert(object):
    """Tests for feedback_storage.upsert()."""

    def test_upsert_creates_new(self, db_session: Session) -> None:
        with db_session.begin():
            result = feedback_storage.upsert(7, assignment_id=10, file_count=1, session=db_session)

        assert result.grade_id == 7
        assert result.file_count == 1
        assert result.create_time is not None

    def test_upsert_updates_existing(self, db_session: Session) -> None:
        """A second upsert for the same grade updates the one record."""
        with db_session.begin():
            first = feedback_storage.upsert(7, assignment_id=10, file_count=1, session=db_session)
            second = feedback_storage.upsert(7, assignment_id=10, file_count=0, session=db_session)

        assert second.feedback_id == first.feedback_id
        assert second.file_count == 0

        with db_session.begin():
            records = feedback_storage.find(assignment_id=10, session=db_session)
        assert len(records) == 1

    def test_upsert_negative_count_raises(self, db_session: Session) -> None:
        with db_session.begin():
            with pytest.raises(ValueError, match="must not be negative"):
                feedback_storage.upsert(7, assignment_id=10, file_count=-1, session=db_session)

            assert feedback_storage.get(7, session=db_session) is None


class TestFind(object):
    """Tests for feedback_storage.find()."""

    def test_find_all_ordered_by_grade(self, db_session: Session) -> None:
        with db_session.begin():
            feedback_storage.upsert(3, assignment_id=10, file_count=1, session=db_session)
            feedback_storage.upsert(1, assignment_id=11, file_count=1, session=db_session)
            feedback_storage.upsert(2, assignment_id=10, file_count=1, session=db_session)

            result = feedback_storage.find(session=db_session)

        assert [r.grade_id for r in result] == [1, 2, 3]

    def test_find_by_assignment(self, db_session: Session) -> None:
        with db_session.begin():
            feedback_storage.upsert(1, assignment_id=10, file_count=1, session=db_session)
            feedback_storage.upsert(2, assignment_id=11, file_count=1, session=db_session)

            result = feedback_storage.find(assignment_id=11, session=db_session)

        assert [r.grade_id for r in result] == [2]


class TestDeleteByAssignment(object):
    """Tests for feedback_storage.delete_by_assignment()."""

    def test_deletes_only_that_assignment(self, db_session: Session) -> None:
        with db_session.begin():
            feedback_storage.upsert(1, assignment_id=10, file_count=1, session=db_session)
            feedback_storage.upsert(2, assignment_id=10, file_count=1, session=db_session)
            feedback_storage.upsert(3, assignment_id=11, file_count=1, session=db_session)

        with db_session.begin():
            deleted = feedback_storage.delete_by_assignment(10, session=db_session)

        assert deleted == 2
        with db_session.begin():
            assert feedback_storage.find(assignment_id=10, session=db_session) == ()
            assert feedback_storage.get(3, session=db_session) is not None

    def test_nothing_to_delete(self, db_session: Session) -> None:
        with db_session.begin():
            assert feedback_storage.delete_by_assignment(99, session=db_session) == 0
