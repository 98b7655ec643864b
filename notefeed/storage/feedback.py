from __future__ import annotations

import sqlalchemy as sqla

from notefeed.core import di
from notefeed.model import AssignmentID, FeedbackID, FeedbackRecord, GradeID

from . import Session
from .table import feedback_records


def get(
    grade_id: GradeID,
    *,
    session: Session = di.Provide["storage.persistent.session"],
) -> FeedbackRecord | None:
    """Get the feedback record of a grade."""
    stmt = sqla.select(feedback_records.__table__).where(feedback_records.grade_id == grade_id)
    row = session.execute(stmt).mappings().one_or_none()
    return FeedbackRecord(**row) if row else None


def find(
    *,
    assignment_id: AssignmentID | None = None,
    session: Session = di.Provide["storage.persistent.session"],
) -> tuple[FeedbackRecord, ...]:
    """Find feedback records, optionally limited to one assignment."""
    stmt = sqla.select(feedback_records.__table__).order_by(feedback_records.grade_id)
    if assignment_id is not None:
        stmt = stmt.where(feedback_records.assignment_id == assignment_id)
    rows = session.execute(stmt).mappings().all()
    return tuple(FeedbackRecord(**row) for row in rows)


def upsert(
    grade_id: GradeID,
    *,
    assignment_id: AssignmentID,
    file_count: int,
    session: Session = di.Provide["storage.persistent.session"],
) -> FeedbackRecord:
    """Create the feedback record of a grade, or update its file count.

    Raises:
        ValueError: If file_count is negative
    """
    if file_count < 0:
        raise ValueError(f"file_count must not be negative, got {file_count}")

    stmt = (
        sqla
        .update(feedback_records)
        .where(feedback_records.grade_id == grade_id)
        .values(file_count=file_count)
    )
    result = session.execute(stmt)
    if result.rowcount == 0:  # pyright: ignore[reportAttributeAccessIssue]
        session.execute(
            sqla.insert(feedback_records).values(
                feedback_id=FeedbackID(),
                grade_id=grade_id,
                assignment_id=assignment_id,
                file_count=file_count,
            )
        )
    session.flush()
    record = get(grade_id, session=session)
    assert record is not None
    return record


def delete_by_assignment(
    assignment_id: AssignmentID,
    *,
    session: Session = di.Provide["storage.persistent.session"],
) -> int:
    """Delete every feedback record of an assignment.

    Returns:
        The number of records deleted
    """
    stmt = sqla.delete(feedback_records).where(feedback_records.assignment_id == assignment_id)
    result = session.execute(stmt)
    return int(result.rowcount)  # pyright: ignore[reportAttributeAccessIssue, reportUnknownArgumentType]
