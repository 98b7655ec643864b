"""Database schema migrations for the feedback and link tables."""

from __future__ import annotations

import alembic.command
import alembic.config

import notefeed.lib.cli as click
from notefeed.core import di

AlembicConfig = alembic.config.Config


@click.group("schema")
def schema():
    """Inspect and migrate the database schema."""
    ...


@schema.command()
@click.option("--verbose", "-v", is_flag=True, default=False)
@di.inject
def current(verbose: bool, alembic_conf: AlembicConfig = di.Provide["storage.persistent.alembic_config"]):
    """Show the revision the database is at."""
    alembic.command.current(alembic_conf, verbose=verbose)


@schema.command()
@click.argument("revision", default="head")
@click.option("--sql", is_flag=True, default=False, help="emit SQL instead of running it")
@di.inject
def up(revision: str, sql: bool, alembic_conf: AlembicConfig = di.Provide["storage.persistent.alembic_config"]):
    """Upgrade to REVISION (default: head)."""
    alembic.command.upgrade(alembic_conf, revision, sql=sql)


@schema.command()
@click.argument("revision")
@di.inject
def down(revision: str, alembic_conf: AlembicConfig = di.Provide["storage.persistent.alembic_config"]):
    alembic.command.downgrade(alembic_conf, revision)


@schema.command()
@click.option("--verbose", "-v", is_flag=True, default=False)
@di.inject
def history(verbose: bool, alembic_conf: AlembicConfig = di.Provide["storage.persistent.alembic_config"]):
    alembic.command.history(alembic_conf, verbose=verbose, indicate_current=True)


@schema.command()
@click.argument("revision")
@di.inject
def stamp(revision: str, alembic_conf: AlembicConfig = di.Provide["storage.persistent.alembic_config"]):
    """Mark the database as being at REVISION without migrating."""
    alembic.command.stamp(alembic_conf, revision)


@schema.command()
@click.argument("message")
@di.inject
def generate(message: str, alembic_conf: AlembicConfig = di.Provide["storage.persistent.alembic_config"]):
    alembic.command.revision(alembic_conf, message)
