"""Exceptions for feedback synchronization."""

from __future__ import annotations

import typing as t

from notefeed.model import GradeID, SyncErrorKind


class SyncError(Exception):
    """Feedback for a grade could not be synchronized. Retrying is up to the user."""

    kind: t.ClassVar[SyncErrorKind]

    def __init__(self, grade_id: GradeID, message: str | None = None) -> None:
        self.grade_id = grade_id
        super().__init__(message or f"{self.kind.value} (grade {grade_id})")


class LinkNotFoundError(SyncError):
    """No OneNote feedback page is linked to the grade's submission."""

    kind = SyncErrorKind.LinkNotFound


class AuthRequiredError(SyncError):
    """The user is not signed in to OneNote."""

    kind = SyncErrorKind.AuthRequired


class ExportFailedError(SyncError):
    """OneNote did not produce an export of the feedback page."""

    kind = SyncErrorKind.ExportFailed


class StoreWriteFailedError(SyncError):
    """The exported archive or its file count could not be saved."""

    kind = SyncErrorKind.StoreWriteFailed
