from __future__ import annotations

import typing as t
from pathlib import Path

import alembic.config
import sqlalchemy
import sqlalchemy.event
import sqlalchemy.orm
from dependency_injector.containers import DeclarativeContainer
from dependency_injector.providers import Configuration, Container, Factory, Object, Provider, Resource, Singleton
from sqlalchemy.engine.url import URL as DSN

from notefeed.storage.file import FileStore, LocalFileStore

from ..config.secrets import DatabaseSecrets
from ..config.storage import DatabaseSettings, FileSettings
from ..di import NotReady
from ..provider import LoggingProvider


def provide_dsn(config: DatabaseSettings, secrets: DatabaseSecrets) -> DSN:
    if config.driver == "sqlite":
        return DSN.create("sqlite", database=config.database)
    return DSN.create(
        config.driver,
        port=config.port,
        host=str(config.host) if config.host else None,
        username=secrets.username.get_secret_value() if secrets.username else None,
        password=secrets.password.get_secret_value() if secrets.password else None,
        database=config.database,
    )


def provide_alembic_conf(migration_path: Path, dsn: DSN, root: Path | NotReady) -> alembic.config.Config:
    if isinstance(root, NotReady):
        raise RuntimeError("root path is unavailable")

    escaped_str = dsn.render_as_string(hide_password=False).replace("%", "%%")

    ac = alembic.config.Config()
    ac.set_main_option("script_location", str(root / migration_path))
    ac.set_section_option("alembic", "sqlalchemy.url", escaped_str)
    ac.set_section_option("alembic", "file_template", "%%(year)d-%%(month).2d-%%(day).2d-%%(slug)s-%%(rev)s")
    return ac


def provide_engine(config: DatabaseSettings, dsn: DSN, logging: LoggingProvider) -> sqlalchemy.Engine:
    logger = logging.get_logger()

    engine = sqlalchemy.create_engine(dsn, echo=config.echo)
    if engine.dialect.name == "postgresql":
        sqlalchemy.event.listen(engine, "connect", register_timezone)
    logger.info(
        "initialized SQLAlchemy engine",
        extra={
            "driver": config.driver,
            "database": config.database,
            "host": config.host,
            "port": config.port,
        },
    )
    return engine


def provide_session(engine: sqlalchemy.Engine) -> sqlalchemy.orm.Session:
    """Create a new session. Caller is responsible for closing it."""
    maker = sqlalchemy.orm.sessionmaker(engine, expire_on_commit=False, autoflush=False)
    return maker(autobegin=False)


def provide_file_store(config: FileSettings, state_path: Path) -> FileStore:
    match config.backend:
        case "local":
            return LocalFileStore(config.local_path or state_path / "files")


class PersistentContainer(DeclarativeContainer):
    config = Configuration()
    secrets = Configuration()
    logging: Provider[LoggingProvider] = Resource()
    root: Provider[Path | NotReady] = Object()

    dsn: Provider[DSN] = Singleton(
        provide_dsn,
        config=config.database.as_(DatabaseSettings),
        secrets=secrets.database.as_(DatabaseSecrets),
    )
    alembic_config: Provider[alembic.config.Config] = Singleton(
        provide_alembic_conf, migration_path=Path("migrations/"), dsn=dsn, root=root
    )
    engine: Provider[sqlalchemy.Engine] = Singleton(
        provide_engine, config=config.database.as_(DatabaseSettings), dsn=dsn, logging=logging
    )
    session: Provider[sqlalchemy.orm.Session] = Factory(provide_session, engine=engine)


class StorageContainer(DeclarativeContainer):
    config = Configuration(strict=True)
    secrets = Configuration(strict=True)
    logging: Provider[LoggingProvider] = Resource()
    root: Provider[Path | NotReady] = Object()
    state_path: Provider[Path] = Resource()

    persistent: Provider[PersistentContainer] = Container(
        PersistentContainer, config=config.persistent, secrets=secrets, logging=logging, root=root
    )
    files: Provider[FileStore] = Singleton(
        provide_file_store, config=config.files.as_(FileSettings), state_path=state_path
    )


def register_timezone(dbapi_conn: t.Any, _: t.Any) -> None:
    """Set connection timezone to UTC for consistent datetime handling.

    PostgreSQL TIMESTAMP WITH TIME ZONE stores timestamps in UTC but returns
    them converted to the connection's timezone. Setting UTC ensures consistent
    timezone-aware datetimes across all environments.
    """
    cursor = dbapi_conn.cursor()
    cursor.execute("SET TIMEZONE TO 'UTC'")
    cursor.close()
