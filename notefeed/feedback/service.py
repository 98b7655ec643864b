"""Synchronization of OneNote feedback pages into per-grade file areas.

Each grade owns one file area holding at most one artifact: the zip export
of the OneNote page the teacher wrote feedback in. A feedback record per
grade tracks how many files the area holds; it is always recounted from the
file store, never adjusted incrementally.
"""

from __future__ import annotations

import datetime
import logging
import tempfile
import typing as t
from pathlib import Path

import shortuuid
import sqlalchemy.exc

from notefeed.core.config import FeedbackSettings
from notefeed.lib.util import timestamp_filename
from notefeed.model import AssignmentID, FeedbackRecord, FileArea, Grade, GradeID, StoredFile, SummaryView
from notefeed.storage import feedback as feedback_storage
from notefeed.storage import link as link_storage
from notefeed.storage import Session
from notefeed.storage.file import FileStore

from .errors import AuthRequiredError, ExportFailedError, LinkNotFoundError, StoreWriteFailedError
from .lock import GradeLocks

if t.TYPE_CHECKING:
    from notefeed.lib.vendor.onenote import ExportResult

logger = logging.getLogger(__name__)


class DocumentClient(t.Protocol):
    def has_valid_session(self) -> bool: ...

    def export_page(self, page_id: str, dest_path: Path) -> ExportResult | None: ...

    def render_sign_in_widget(self, state: str | None = None) -> str: ...


class FeedbackSyncService(object):
    def __init__(
        self,
        *,
        client: DocumentClient,
        files: FileStore,
        session_factory: t.Callable[[], Session],
        settings: FeedbackSettings,
        locks: GradeLocks,
        utcnow: t.Callable[[], datetime.datetime],
        work_path: Path | None = None,
    ) -> None:
        self._client = client
        self._files = files
        self._session_factory = session_factory
        self._settings = settings
        self._locks = locks
        self._utcnow = utcnow
        self._work_path = work_path

    @property
    def name(self) -> str:
        return self._settings.name

    def area(self, grade: Grade) -> FileArea:
        return FileArea(
            component=self._settings.component,
            area=self._settings.area,
            context_id=grade.assignment_id,
            item_id=grade.grade_id,
        )

    def file_areas(self) -> dict[str, str]:
        """Areas this component stores files in, with their display names."""
        return {self._settings.area: self._settings.name}

    def sync(self, grade: Grade) -> FeedbackRecord:
        """Replace the grade's artifact with a fresh export of its feedback page.

        The new archive is written before older files are removed, so a
        failure part way leaves the previous artifact in place. If older files
        cannot be removed, the record is still recounted before raising.

        Raises:
            LinkNotFoundError: No feedback page is linked to the submission
            AuthRequiredError: The user is not signed in to OneNote
            ExportFailedError: OneNote did not return an export, or it could not be written locally
            StoreWriteFailedError: The archive or the record could not be saved
        """
        extra = {"grade_id": grade.grade_id, "assignment_id": grade.assignment_id, "user_id": grade.user_id}

        with self._session_factory() as session:
            with session.begin():
                page_id = link_storage.resolve(grade.assignment_id, grade.user_id, session=session)
            if page_id is None:
                logger.info("no feedback page linked to submission", extra=extra)
                raise LinkNotFoundError(grade.grade_id)

            if not self._client.has_valid_session():
                raise AuthRequiredError(grade.grade_id)

            try:
                with tempfile.TemporaryDirectory(prefix="notefeed-", dir=self._work_path) as workdir:
                    export = self._client.export_page(page_id, Path(workdir) / f"asg_{shortuuid.uuid()}.zip")
                    if export is None:
                        # the session may have lapsed while exporting
                        if not self._client.has_valid_session():
                            raise AuthRequiredError(grade.grade_id)
                        logger.warning("feedback page export failed", extra={**extra, "page_id": page_id})
                        raise ExportFailedError(grade.grade_id)

                    with self._locks.hold(grade.grade_id):
                        stored = self._replace_artifact(grade, export.path, session)
                        record = self._update_file_count(grade, session)
            except OSError as e:
                logger.exception("could not export feedback page", extra={**extra, "page_id": page_id})
                raise ExportFailedError(grade.grade_id, f"could not export feedback page: {e}") from e

        logger.info(
            "synchronized feedback",
            extra={**extra, "page_id": page_id, "file": stored.filename, "file_count": record.file_count},
        )
        return record

    def _replace_artifact(self, grade: Grade, path: Path, session: Session) -> StoredFile:
        area = self.area(grade)
        filename = timestamp_filename(self._settings.archive_prefix, self._utcnow().timestamp(), ".zip")
        try:
            stored = self._files.create_from_path(area, filename, path)
        except OSError as e:
            logger.exception("could not store feedback archive", extra={"area": area.key, "file": filename})
            raise StoreWriteFailedError(grade.grade_id, f"could not store feedback archive: {e}") from e

        try:
            for old in self._files.list_files(area):
                if old.filename != stored.filename:
                    self._files.delete(area, old.filename)
        except OSError as e:
            logger.exception("could not remove older feedback files", extra={"area": area.key, "file": filename})
            # the area now holds the new archive too; the record must count it
            self._update_file_count(grade, session)
            raise StoreWriteFailedError(grade.grade_id, f"could not remove older feedback files: {e}") from e
        return stored

    def _update_file_count(self, grade: Grade, session: Session) -> FeedbackRecord:
        try:
            count = self._files.count_files(self.area(grade))
            with session.begin():
                return feedback_storage.upsert(
                    grade.grade_id, assignment_id=grade.assignment_id, file_count=count, session=session
                )
        except (OSError, sqlalchemy.exc.SQLAlchemyError) as e:
            logger.exception("could not save feedback record", extra={"grade_id": grade.grade_id})
            raise StoreWriteFailedError(grade.grade_id, f"could not save feedback record: {e}") from e

    def update_file_count(self, grade: Grade) -> FeedbackRecord:
        """Recount the grade's files and save the count."""
        with self._locks.hold(grade.grade_id), self._session_factory() as session:
            return self._update_file_count(grade, session)

    def get_feedback(self, grade_id: GradeID) -> FeedbackRecord | None:
        with self._session_factory() as session, session.begin():
            return feedback_storage.get(grade_id, session=session)

    def get_summary(self, grade: Grade, max_summary_files: int | None = None) -> SummaryView:
        limit = self._settings.max_summary_files if max_summary_files is None else max_summary_files
        count = self._files.count_files(self.area(grade))
        signed_in = self._client.has_valid_session()
        return SummaryView(
            file_count=count,
            over_limit=count > limit,
            show_login_prompt=not signed_in,
            show_open_action=signed_in and grade.is_graded,
        )

    def sign_in_widget(self, state: str | None = None) -> str:
        return self._client.render_sign_in_widget(state)

    def is_empty(self, grade: Grade) -> bool:
        return self._files.count_files(self.area(grade)) == 0

    def view(self, grade: Grade) -> tuple[StoredFile, ...]:
        """Files of the grade's area, for a download listing."""
        return self._files.list_files(self.area(grade))

    def on_assignment_deleted(self, assignment_id: AssignmentID) -> int:
        """Remove every feedback record and file of a deleted assignment.

        Returns:
            Number of feedback records deleted
        """
        with self._session_factory() as session, session.begin():
            deleted = feedback_storage.delete_by_assignment(assignment_id, session=session)
        purged = self._files.delete_context(self._settings.component, assignment_id)
        logger.info(
            "deleted assignment feedback",
            extra={"assignment_id": assignment_id, "records": deleted, "files": purged},
        )
        return deleted
