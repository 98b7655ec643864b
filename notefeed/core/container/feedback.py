from __future__ import annotations

import typing as t
from pathlib import Path

import sqlalchemy.orm
from dependency_injector.containers import DeclarativeContainer
from dependency_injector.providers import Object, Provider, Singleton

from notefeed.feedback.lock import GradeLocks
from notefeed.storage.file import FileStore

from ..config.feedback import FeedbackSettings
from ..provider import TimestampProvider

if t.TYPE_CHECKING:
    from notefeed.feedback.service import DocumentClient, FeedbackSyncService


def provide_service(
    client: DocumentClient,
    files: FileStore,
    session_factory: t.Callable[[], sqlalchemy.orm.Session],
    settings: FeedbackSettings,
    locks: GradeLocks,
    utcnow: TimestampProvider,
    work_path: Path,
) -> FeedbackSyncService:
    # notefeed.feedback.service imports repositories that import notefeed.core
    from notefeed.feedback.service import FeedbackSyncService

    return FeedbackSyncService(
        client=client,
        files=files,
        session_factory=session_factory,
        settings=settings,
        locks=locks,
        utcnow=utcnow,
        work_path=work_path,
    )


class FeedbackContainer(DeclarativeContainer):
    settings: Provider[FeedbackSettings] = Object()
    client: Provider[DocumentClient] = Object()
    files: Provider[FileStore] = Object()
    session_factory: Provider[t.Callable[[], sqlalchemy.orm.Session]] = Object()
    utcnow: Provider[TimestampProvider] = Object()
    runtime_path: Provider[Path] = Object()

    locks: Provider[GradeLocks] = Singleton(GradeLocks)
    service: Provider[FeedbackSyncService] = Singleton(
        provide_service,
        client=client,
        files=files,
        session_factory=session_factory,
        settings=settings,
        locks=locks,
        utcnow=utcnow,
        work_path=runtime_path,
    )
