"""Dialect names and dialect-specific statement builders.

GIGCAL runs on PostgreSQL and SQLite. Both support ``INSERT .. ON CONFLICT``,
which the adapters use for calendar upserts and per-artist lock rows; this
module picks the right ``insert`` construct for a connection.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import TYPE_CHECKING, Any

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

if TYPE_CHECKING:
    from sqlalchemy import Table
    from sqlalchemy.engine import Connection, Engine
    from sqlalchemy.sql.dml import Insert


class UnsupportedDialect(Exception):
    """Raised when an unsupported database dialect is encountered."""


class DialectName(str, Enum):
    """Supported SQLAlchemy dialect names.

    Attributes:
        POSTGRES: PostgreSQL dialect (``"postgresql"``).
        SQLITE:   SQLite dialect (``"sqlite"``).
    """

    POSTGRES = "postgresql"
    SQLITE = "sqlite"

    @classmethod
    def from_string(cls, dialect_str: str) -> DialectName:
        """Normalize a dialect string such as ``postgresql+psycopg`` or ``sqlite``.

        Raises:
            UnsupportedDialect: if the dialect is not recognized or supported.
        """

        base = (dialect_str or "").strip().lower().split("+", 1)[0]
        if base in {"postgres", "postgresql", "pg"}:
            return cls.POSTGRES
        if base == cls.SQLITE.value:
            return cls.SQLITE
        raise UnsupportedDialect(f"Unsupported dialect: {dialect_str!r}")

    @classmethod
    def from_sqlalchemy(cls, obj: Engine | Connection) -> DialectName:
        """Extract the dialect from a SQLAlchemy Engine or Connection.

        Raises:
            UnsupportedDialect: if the dialect is not recognized or supported.
        """
        try:
            name = obj.dialect.name
        except AttributeError as e:
            raise UnsupportedDialect(
                f"Object {type(obj).__name__} does not expose .dialect.name"
            ) from e
        return cls.from_string(name)


def build_upsert(
    connection: Connection,
    table: Table,
    values: Mapping[str, Any],
    *,
    key: Sequence[str],
    update: Sequence[str],
) -> Insert:
    """Build ``INSERT .. ON CONFLICT (key) DO UPDATE SET update..`` for the connection.

    Args:
        connection: Connection whose dialect decides the construct.
        table: Target table.
        values: Column values for the new row.
        key: Columns of the conflicting unique constraint.
        update: Columns overwritten from the proposed row on conflict.

    Raises:
        UnsupportedDialect: if the connection is neither PostgreSQL nor SQLite.
    """
    dialect = DialectName.from_sqlalchemy(connection)
    insert = pg_insert if dialect is DialectName.POSTGRES else sqlite_insert
    stmt = insert(table).values(**values)
    return stmt.on_conflict_do_update(
        index_elements=list(key),
        set_={column: stmt.excluded[column] for column in update},
    )
