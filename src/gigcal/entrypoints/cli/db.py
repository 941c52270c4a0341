"""GIGCAL DB CLI: forward-only Alembic wrappers.

Only forward operations are exposed; ``downgrade`` and ``stamp`` are left to
Alembic itself. Status lines go to stderr and Alembic output to stdout.
``GIGCAL_DB_URL`` must be set for every command that touches the database.
"""

from __future__ import annotations

import sys
from enum import Enum
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from alembic import command
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import text
from sqlalchemy.exc import ArgumentError, OperationalError

from gigcal import config
from gigcal.adapters.db.engine import make_engine

from .helpers import error, sanitize_url, success, warn
from .helpers.errors import MISSING_DB_URL_MSG

if TYPE_CHECKING:
    from alembic.config import Config
    from sqlalchemy.engine import Engine

INVALID_URL_FORMAT_MSG = (
    "The value of GIGCAL_DB_URL is not a valid SQLAlchemy database URL."
)

CANNOT_CONNECT_MSG = (
    "GIGCAL_DB_URL is set, but the database is not reachable.\n"
    "Please ensure the database is running and the URL is correct."
)

UPGRADE_SCHEMA_WARNING = (
    "This will upgrade the database schema to the latest version.\n"
    "Please ensure you have a backup before proceeding."
)

UPGRADE_SCHEMA_INSTRUCTIONS = "Run 'gigcal db upgrade' to update the schema."


class MigrationStatus(Enum):
    """Where the database schema stands relative to the packaged head."""

    UP_TO_DATE = "up to date"
    OUT_OF_DATE = "out of date"
    UNINITIALIZED = "uninitialized"


def _check_connection(url: str) -> None:
    engine = make_engine(url)
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))  # pragma: no mutate


def get_checked_url() -> str:
    """Configured URL, verified to parse and to reach a database.

    Raises:
        click.ClickException: with guidance for a missing, malformed or
            unreachable URL.
    """
    try:
        url = config.get_db_url()
    except config.DatabaseUrlNotSetError as e:
        raise click.ClickException(MISSING_DB_URL_MSG) from e
    try:
        _check_connection(url)
    except OperationalError as e:
        raise click.ClickException(CANNOT_CONNECT_MSG) from e
    except ArgumentError as e:
        raise click.ClickException(INVALID_URL_FORMAT_MSG) from e
    return url


def current_revision(engine: Engine) -> str | None:
    with engine.connect() as conn:
        return MigrationContext.configure(conn).get_current_revision()


def head_revision(cfg: Config) -> str | None:
    heads_ = ScriptDirectory.from_config(cfg).get_heads()
    return heads_[0] if heads_ else None


def migration_status(engine: Engine, cfg: Config) -> tuple[str | None, MigrationStatus]:
    """Current revision and how it compares with the packaged head."""
    rev = current_revision(engine)
    if rev is None:
        return rev, MigrationStatus.UNINITIALIZED
    if rev == head_revision(cfg):
        return rev, MigrationStatus.UP_TO_DATE
    return rev, MigrationStatus.OUT_OF_DATE


verbose_option = click.option(
    "--verbose",
    "-v",
    "verbose",
    is_flag=True,
    help="Show alembic's more verbose output.",
)


@click.group(cls=clickx.ExtraGroup)
def db() -> None:
    """Database management commands."""


@db.command()
@verbose_option
def current(verbose: bool) -> None:
    """Show current DB revision."""
    cfg = config.build_alembic_config(db_url=get_checked_url(), stdout=sys.stdout)
    command.current(cfg, verbose=verbose)


@db.command()
@verbose_option
def heads(verbose: bool) -> None:
    """Show available head revisions."""
    cfg = config.build_alembic_config(stdout=sys.stdout)
    command.heads(cfg, verbose=verbose)


@db.command()
@verbose_option
@click.option(
    "--indicate-current",
    "-i",
    "indicate_current",
    is_flag=True,
    help="Indicate the current revision.",
)
def history(verbose: bool, indicate_current: bool) -> None:
    """Show revision history."""
    url = get_checked_url() if indicate_current else None
    cfg = config.build_alembic_config(db_url=url, stdout=sys.stdout)
    command.history(cfg, verbose=verbose, indicate_current=indicate_current)


@db.command()
@click.option("--sql", is_flag=True, help="Generate SQL without executing.")
@click.option("--force", is_flag=True, help="Upgrade without confirmation.")
def upgrade(sql: bool, force: bool) -> None:
    """Upgrade the database to the head revision."""
    url = get_checked_url()
    cfg = config.build_alembic_config(db_url=url, stdout=sys.stdout)
    if not force and not sql:
        warn(UPGRADE_SCHEMA_WARNING)
        click.secho(f"db: {click.style(sanitize_url(url), underline=True)}", err=True)
        click.confirm("Are you sure you want to proceed?", abort=True, err=True)
    command.upgrade(cfg, revision="head", sql=sql)
    success("Upgrade complete!")


@db.command()
def status() -> None:
    """Show database connection and schema status."""
    try:
        url = get_checked_url()
    except click.ClickException as e:
        error("Cannot connect to database")
        click.echo(e.format_message())
        return

    engine = make_engine(url)
    success("Database reachable")
    click.echo(f"Backend : {engine.dialect.name}")
    click.echo(f"URL     : {sanitize_url(url)}")
    rev, state = migration_status(engine, config.build_alembic_config(db_url=url))
    click.echo(f"Schema  : {f'{rev} ({state.value})' if rev else state.value}")
    if state is not MigrationStatus.UP_TO_DATE:
        warn(UPGRADE_SCHEMA_INSTRUCTIONS)
