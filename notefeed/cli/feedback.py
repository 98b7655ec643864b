"""CLI commands for synchronizing and inspecting grade feedback."""

from __future__ import annotations

import notefeed.lib.cli as click
from notefeed.core import di
from notefeed.core.provider import TimestampProvider
from notefeed.feedback import AuthRequiredError, FeedbackSyncService, SyncError
from notefeed.lib.vendor.onenote import OneNoteSession
from notefeed.model import Grade


def grade_options(fn):
    fn = click.option("--grade", "grade_value", type=float, default=None, help="Numeric grade, if graded")(fn)
    fn = click.option("--user", "-u", "user_id", type=int, required=True)(fn)
    fn = click.option("--assignment", "-a", "assignment_id", type=int, required=True)(fn)
    fn = click.argument("grade_id", type=int)(fn)
    return fn


@click.group("feedback")
def feedback():
    """Synchronize OneNote feedback into grade file areas."""
    ...


@feedback.command("sync")
@grade_options
@click.option("--access-token", envvar="NOTEFEED_ONENOTE_TOKEN", default=None, help="Graph access token to sign in with")
@click.option("--expires-in", type=int, default=None, help="Lifetime of the access token, in seconds")
@di.inject
def feedback_sync(
    grade_id: int,
    assignment_id: int,
    user_id: int,
    grade_value: float | None,
    access_token: str | None,
    expires_in: int | None,
    service: FeedbackSyncService = di.Provide["feedback.service"],
    onenote_session: OneNoteSession = di.Provide["vendor.onenote.session"],
    utcnow: TimestampProvider = di.Provide["utcnow"],
) -> None:
    """Export the linked OneNote page and store it as the grade's feedback.

    GRADE_ID is the grade to synchronize.
    """
    if access_token:
        onenote_session.sign_in(access_token, expires_in, now=utcnow())

    grade = Grade(grade_id=grade_id, assignment_id=assignment_id, user_id=user_id, grade=grade_value)
    try:
        record = service.sync(grade)
    except AuthRequiredError:
        click.echo("Not signed in to OneNote. Sign in here, then pass --access-token:", err=True)
        click.echo(service.sign_in_widget(str(grade_id)), err=True)
        raise SystemExit(1)
    except SyncError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    click.echo(f"Synchronized grade {record.grade_id}: {record.file_count} file(s)")


@feedback.command("summary")
@grade_options
@click.option("--max-files", type=int, default=None, help="Summary file limit (default from configuration)")
@di.inject
def feedback_summary(
    grade_id: int,
    assignment_id: int,
    user_id: int,
    grade_value: float | None,
    max_files: int | None,
    service: FeedbackSyncService = di.Provide["feedback.service"],
) -> None:
    """Show what a feedback summary for the grade would display."""
    grade = Grade(grade_id=grade_id, assignment_id=assignment_id, user_id=user_id, grade=grade_value)
    summary = service.get_summary(grade, max_files)

    click.echo(f"{service.name}: {summary.file_count} file(s)")
    if summary.over_limit:
        click.echo("  (too many files to list; showing link to full view)")
    if summary.show_login_prompt:
        click.echo("  sign-in required")
    if summary.show_open_action:
        click.echo("  open in OneNote available")


@feedback.command("files")
@grade_options
@di.inject
def feedback_files(
    grade_id: int,
    assignment_id: int,
    user_id: int,
    grade_value: float | None,
    service: FeedbackSyncService = di.Provide["feedback.service"],
) -> None:
    """List the feedback files stored for the grade."""
    grade = Grade(grade_id=grade_id, assignment_id=assignment_id, user_id=user_id, grade=grade_value)
    if service.is_empty(grade):
        click.echo("No feedback files.")
        return

    for f in service.view(grade):
        click.echo(f"{f.filename}\t{f.size}\t{f.modified_time.isoformat()}")


@feedback.command("delete-assignment")
@click.argument("assignment_id", type=int)
@click.confirmation_option(prompt="Delete all feedback for this assignment?")
@di.inject
def feedback_delete_assignment(
    assignment_id: int,
    service: FeedbackSyncService = di.Provide["feedback.service"],
) -> None:
    """Delete every feedback record and file of ASSIGNMENT_ID."""
    deleted = service.on_assignment_deleted(assignment_id)
    click.echo(f"Deleted {deleted} feedback record(s) for assignment {assignment_id}")
