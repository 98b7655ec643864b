from __future__ import annotations

import typing as t

import sqlalchemy as sqla

from notefeed.core import di
from notefeed.lib import NotSet
from notefeed.model import AssignmentID, ExternalDocumentLink, LinkID, UserID

from . import Session
from .table import document_links


def get(
    assignment_id: AssignmentID,
    user_id: UserID,
    *,
    session: Session = di.Provide["storage.persistent.session"],
) -> ExternalDocumentLink | None:
    """Get the OneNote pages linked to a user's work on an assignment."""
    stmt = sqla.select(document_links.__table__).where(
        document_links.assignment_id == assignment_id,
        document_links.user_id == user_id,
    )
    row = session.execute(stmt).mappings().one_or_none()
    return ExternalDocumentLink(**row) if row else None


def resolve(
    assignment_id: AssignmentID,
    user_id: UserID,
    *,
    session: Session = di.Provide["storage.persistent.session"],
) -> str | None:
    """Resolve the page holding the teacher's feedback for a user's submission."""
    stmt = sqla.select(document_links.feedback_page_id).where(
        document_links.assignment_id == assignment_id,
        document_links.user_id == user_id,
    )
    return session.execute(stmt).scalar_one_or_none()


def put(
    assignment_id: AssignmentID,
    user_id: UserID,
    *,
    feedback_page_id: str | None | NotSet = NotSet(),
    submission_page_id: str | None | NotSet = NotSet(),
    session: Session = di.Provide["storage.persistent.session"],
) -> ExternalDocumentLink:
    """Create or update the link of a user's work on an assignment.

    Uses NotSet sentinel for parameters where None may be a valid value.
    """
    values: dict[str, t.Any] = {}
    if not isinstance(feedback_page_id, NotSet):
        values["feedback_page_id"] = feedback_page_id
    if not isinstance(submission_page_id, NotSet):
        values["submission_page_id"] = submission_page_id

    existing = get(assignment_id, user_id, session=session)
    if existing is None:
        session.execute(
            sqla.insert(document_links).values(
                link_id=LinkID(),
                assignment_id=assignment_id,
                user_id=user_id,
                **values,
            )
        )
    elif values:
        session.execute(
            sqla.update(document_links).where(document_links.link_id == existing.link_id).values(**values)
        )
    session.flush()
    result = get(assignment_id, user_id, session=session)
    assert result is not None
    return result
