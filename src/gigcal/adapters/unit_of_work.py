"""SQLAlchemy-backed Unit of Work for GIGCAL.

Provides a context-managed UnitOfWork using a SQLAlchemy Connection and the
SQLAlchemy calendar, block and booking adapters.
"""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING

from gigcal.adapters.db.dialects import build_upsert
from gigcal.adapters.db.schema import artist_locks
from gigcal.adapters.sqlalchemy_adapters import (
    SqlAlchemyBlockRegistry,
    SqlAlchemyBookingStore,
    SqlAlchemyCalendarStore,
)
from gigcal.interfaces.unit_of_work import AbstractUnitOfWork

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine

    from gigcal.interfaces.id_generator import IdGenerator


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """SQLAlchemy-backed Unit of Work.

    ``lock_artist`` upserts the artist's row in ``artist_locks``. PostgreSQL
    holds that row lock until the transaction ends; SQLite takes its database
    write lock, and other writers wait out ``busy_timeout``.
    """

    def __init__(self, engine: Engine, id_generator: IdGenerator):
        self.engine = engine
        self.id_generator = id_generator
        self.connection: Connection
        self._locked: set[str] = set()

    def __enter__(self):
        self.connection = self.engine.connect()
        self.calendar = SqlAlchemyCalendarStore(self.connection)
        self.blocks = SqlAlchemyBlockRegistry(self.connection, self.id_generator)
        self.bookings = SqlAlchemyBookingStore(self.connection)
        self._locked.clear()
        return super().__enter__()

    def __exit__(self, *args):
        try:
            super().__exit__(*args)
        finally:
            self.connection.close()

    def lock_artist(self, artist_id: str) -> None:
        if artist_id in self._locked:
            return
        self.connection.execute(
            build_upsert(
                self.connection,
                artist_locks,
                {
                    "artist_id": artist_id,
                    "locked_at": datetime.datetime.now(datetime.timezone.utc),
                },
                key=("artist_id",),
                update=("locked_at",),
            )
        )
        self._locked.add(artist_id)

    def commit(self):
        self.connection.commit()
        self._locked.clear()

    def rollback(self):
        self.connection.rollback()
        self._locked.clear()
