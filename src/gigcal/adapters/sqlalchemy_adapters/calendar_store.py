"""Implementation of CalendarStore using SQLAlchemy."""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING

from sqlalchemy import delete, select

from gigcal.adapters.db.dialects import build_upsert
from gigcal.adapters.db.schema import availability_entries
from gigcal.domain.value_objects import AvailabilityEntry
from gigcal.interfaces.calendar_store import CalendarStore

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Row


def _to_entry(row: Row) -> AvailabilityEntry:
    return AvailabilityEntry(
        artist_id=row.artist_id,
        date=row.date,
        status=row.status,
        notes=row.notes,
        booking_id=row.booking_id,
    )


class SqlAlchemyCalendarStore(CalendarStore):
    """CalendarStore backed by the ``availability_entries`` table."""

    def __init__(self, connection: Connection):
        self.connection = connection

    def get(self, artist_id: str, day: datetime.date) -> AvailabilityEntry | None:
        stmt = select(availability_entries).where(
            availability_entries.c.artist_id == artist_id,
            availability_entries.c.date == day,
        )
        if not (row := self.connection.execute(stmt).fetchone()):
            return None
        return _to_entry(row)

    def set(self, entry: AvailabilityEntry) -> None:
        values = {
            "artist_id": entry.artist_id,
            "date": entry.date,
            "status": entry.status.value,
            "notes": entry.notes,
            "booking_id": entry.booking_id,
            "updated_at": datetime.datetime.now(datetime.timezone.utc),
        }
        self.connection.execute(
            build_upsert(
                self.connection,
                availability_entries,
                values,
                key=("artist_id", "date"),
                update=("status", "notes", "booking_id", "updated_at"),
            )
        )

    def query_range(
        self, artist_id: str, start: datetime.date, end: datetime.date
    ) -> list[AvailabilityEntry]:
        stmt = (
            select(availability_entries)
            .where(
                availability_entries.c.artist_id == artist_id,
                availability_entries.c.date >= start,
                availability_entries.c.date <= end,
            )
            .order_by(availability_entries.c.date)
        )
        return [_to_entry(row) for row in self.connection.execute(stmt)]

    def clear(self, artist_id: str, day: datetime.date) -> bool:
        result = self.connection.execute(
            delete(availability_entries).where(
                availability_entries.c.artist_id == artist_id,
                availability_entries.c.date == day,
            )
        )
        return result.rowcount == 1
