"""Pytest fixtures for notefeed tests.

The container is booted once per session in the Test environment, which
points storage at an in-memory SQLite database. Each test runs inside a
transaction that is rolled back afterward.

Usage:
    def test_sync(service: FeedbackSyncService, link_factory, grade_factory):
        link_factory(assignment_id=10, user_id=5, feedback_page_id="P1")
        record = service.sync(grade_factory(assignment_id=10, user_id=5))
"""

from __future__ import annotations

import datetime
import os
import typing as t
import zipfile
from pathlib import Path

import pydantic as p
import pytest
import sqlalchemy
import sqlalchemy.event
from sqlalchemy.orm import Session

import notefeed
from notefeed.core import NotefeedContainer
from notefeed.core.config import FeedbackSettings
from notefeed.feedback import FeedbackSyncService, GradeLocks
from notefeed.lib.vendor.onenote import ExportResult
from notefeed.model import DeploymentEnvironment, ExternalDocumentLink, Grade
from notefeed.storage import link as link_storage
from notefeed.storage.file import LocalFileStore
from notefeed.storage.table import base

ROOT = Path(os.path.dirname(notefeed.__file__)).parent


def _sqlite_transactions(engine: sqlalchemy.Engine) -> None:
    # pysqlite manages transactions itself, which breaks SAVEPOINT; hand
    # control back to SQLAlchemy
    @sqlalchemy.event.listens_for(engine, "connect")
    def _connect(dbapi_connection: t.Any, _: t.Any) -> None:
        dbapi_connection.isolation_level = None

    @sqlalchemy.event.listens_for(engine, "begin")
    def _begin(conn: sqlalchemy.Connection) -> None:
        conn.exec_driver_sql("BEGIN")


@pytest.fixture(scope="session")
def container() -> t.Generator[NotefeedContainer]:
    """Boot the DI container for the test session."""
    ct = NotefeedContainer()

    NotefeedContainer.boot(
        ct,
        debug=True,
        env=DeploymentEnvironment.Test,
        config_root=p.FileUrl(f"file://{ROOT}/config"),
        override=(),
    )

    engine = ct.storage().persistent().engine()
    _sqlite_transactions(engine)
    base.metadata.create_all(engine)

    yield ct

    ct.shutdown_resources()


@pytest.fixture
def db_connection(container: NotefeedContainer) -> t.Generator[sqlalchemy.Connection]:
    """A connection inside an outer transaction that is rolled back after the test."""
    engine = container.storage().persistent().engine()

    connection = engine.connect()
    transaction = connection.begin()

    yield connection

    transaction.rollback()
    connection.close()


@pytest.fixture
def session_factory(db_connection: sqlalchemy.Connection) -> t.Callable[[], Session]:
    """Sessions bound to the test connection.

    join_transaction_mode="create_savepoint" makes session.begin() open a
    savepoint, so code that commits still rolls back with the test.
    """

    def make_session() -> Session:
        return Session(
            bind=db_connection,
            autobegin=False,
            expire_on_commit=False,
            join_transaction_mode="create_savepoint",
        )

    return make_session


@pytest.fixture
def db_session(session_factory: t.Callable[[], Session]) -> t.Generator[Session]:
    session = session_factory()
    yield session
    session.close()


class FakeDocumentClient(object):
    """Stands in for the OneNote client; exports pages from an in-memory dict."""

    def __init__(self, utcnow: t.Callable[[], datetime.datetime]) -> None:
        self.pages: dict[str, str] = {}
        self.signed_in = True
        self.fail_export = False
        self.expire_on_export = False
        self.export_error: OSError | None = None
        self.exports: list[Path] = []
        self._utcnow = utcnow

    def has_valid_session(self) -> bool:
        return self.signed_in

    def export_page(self, page_id: str, dest_path: Path) -> ExportResult | None:
        self.exports.append(dest_path)
        if self.export_error is not None:
            raise self.export_error
        if self.expire_on_export:
            self.signed_in = False
            return None
        if self.fail_export or page_id not in self.pages:
            return None

        with zipfile.ZipFile(dest_path, "w") as archive:
            archive.writestr("page.html", self.pages[page_id])
        return ExportResult(page_id=page_id, path=dest_path, size=dest_path.stat().st_size, resource_count=0)

    def render_sign_in_widget(self, state: str | None = None) -> str:
        return f'<a class="onenote-signin" href="https://login.example/?state={state}">Sign in to OneNote</a>'


class Clock(object):
    """Deterministic utcnow that advances one second per call."""

    def __init__(self, start: datetime.datetime) -> None:
        self.now = start

    def __call__(self) -> datetime.datetime:
        now = self.now
        self.now = now + datetime.timedelta(seconds=1)
        return now


@pytest.fixture
def clock() -> Clock:
    return Clock(datetime.datetime(2026, 9, 1, 12, 0, tzinfo=datetime.UTC))


@pytest.fixture
def document_client(clock: Clock) -> FakeDocumentClient:
    return FakeDocumentClient(clock)


@pytest.fixture
def file_store(tmp_path: Path) -> LocalFileStore:
    return LocalFileStore(tmp_path / "files")


@pytest.fixture
def work_path(tmp_path: Path) -> Path:
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def service(
    document_client: FakeDocumentClient,
    file_store: LocalFileStore,
    session_factory: t.Callable[[], Session],
    clock: Clock,
    work_path: Path,
) -> FeedbackSyncService:
    return FeedbackSyncService(
        client=document_client,
        files=file_store,
        session_factory=session_factory,
        settings=FeedbackSettings(),
        locks=GradeLocks(),
        utcnow=clock,
        work_path=work_path,
    )


@pytest.fixture
def grade_factory() -> t.Callable[..., Grade]:
    """Factory fixture for grades; grade ids count up from 1."""
    counter = iter(range(1, 10_000))

    def create_grade(
        assignment_id: int = 10,
        user_id: int = 5,
        grade_id: int | None = None,
        grade: float | None = None,
    ) -> Grade:
        return Grade(
            grade_id=grade_id if grade_id is not None else next(counter),
            assignment_id=assignment_id,
            user_id=user_id,
            grade=grade,
        )

    return create_grade


@pytest.fixture
def link_factory(
    db_session: Session,
    document_client: FakeDocumentClient,
) -> t.Callable[..., ExternalDocumentLink]:
    """Factory fixture linking a feedback page to a submission.

    The page is also published to the fake document client so it can be exported.
    """

    def create_link(
        assignment_id: int = 10,
        user_id: int = 5,
        feedback_page_id: str = "P1",
        content: str = "<html><body><p>Well argued.</p></body></html>",
    ) -> ExternalDocumentLink:
        document_client.pages[feedback_page_id] = content
        with db_session.begin():
            return link_storage.put(assignment_id, user_id, feedback_page_id=feedback_page_id, session=db_session)

    return create_link


@pytest.fixture
def make_file(tmp_path: Path) -> t.Callable[..., Path]:
    """Factory fixture writing a scratch file outside the file store."""
    counter = iter(range(10_000))

    def create_file(content: bytes = b"data") -> Path:
        path = tmp_path / "scratch" / f"file-{next(counter)}.bin"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path

    return create_file
