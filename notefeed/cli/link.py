"""CLI commands for linking OneNote pages to submissions."""

from __future__ import annotations

from sqlalchemy.orm import Session

import notefeed.lib.cli as click
from notefeed.core import di
from notefeed.lib import NotSet
from notefeed.storage import link as link_storage


@click.group("link")
def link():
    """Manage the OneNote pages linked to submissions."""
    ...


@link.command("set")
@click.argument("assignment_id", type=int)
@click.argument("user_id", type=int)
@click.option("--feedback-page", default=None, help="OneNote page id of the teacher's feedback")
@click.option("--submission-page", default=None, help="OneNote page id of the student's submission")
@di.inject
def link_set(
    assignment_id: int,
    user_id: int,
    feedback_page: str | None,
    submission_page: str | None,
    session: Session = di.Provide["storage.persistent.session"],
) -> None:
    """Link OneNote pages to USER_ID's work on ASSIGNMENT_ID."""
    if feedback_page is None and submission_page is None:
        raise click.UsageError("pass --feedback-page and/or --submission-page")

    with session.begin():
        result = link_storage.put(
            assignment_id,
            user_id,
            feedback_page_id=feedback_page if feedback_page is not None else NotSet(),
            submission_page_id=submission_page if submission_page is not None else NotSet(),
            session=session,
        )
    click.echo(f"Linked {result.link_id}")


@link.command("show")
@click.argument("assignment_id", type=int)
@click.argument("user_id", type=int)
@di.inject
def link_show(
    assignment_id: int,
    user_id: int,
    session: Session = di.Provide["storage.persistent.session"],
) -> None:
    with session.begin():
        result = link_storage.get(assignment_id, user_id, session=session)
    if result is None:
        click.echo(f"No pages linked for assignment {assignment_id}, user {user_id}.", err=True)
        raise SystemExit(1)

    click.echo(f"feedback page:   {result.feedback_page_id or '-'}")
    click.echo(f"submission page: {result.submission_page_id or '-'}")
