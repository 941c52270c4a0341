"""Implementation of BookingStore using SQLAlchemy."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import insert, select, update

from gigcal.adapters.db.schema import bookings
from gigcal.domain.booking import Booking
from gigcal.domain.errors import BookingNotFoundError
from gigcal.interfaces.booking_store import BookingStore

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Row

_COLUMNS = (
    "artist_id",
    "venue_id",
    "event_date",
    "event_end_date",
    "status",
    "payment_status",
    "event_time",
    "venue_name",
    "venue_address",
    "event_details",
    "total_fee",
    "deposit_amount",
    "created_at",
    "updated_at",
)


def _to_values(booking: Booking) -> dict[str, Any]:
    values = {column: getattr(booking, column) for column in _COLUMNS}
    values["status"] = booking.status.value
    values["payment_status"] = booking.payment_status.value
    return values


def _to_booking(row: Row) -> Booking:
    return Booking(
        id=row.booking_id, **{column: getattr(row, column) for column in _COLUMNS}
    )


class SqlAlchemyBookingStore(BookingStore):
    """BookingStore backed by the ``bookings`` table."""

    def __init__(self, connection: Connection):
        self.connection = connection

    def add(self, booking: Booking) -> None:
        if self.get(booking.id) is not None:
            raise ValueError(f"duplicate booking id {booking.id}")
        self.connection.execute(
            insert(bookings).values(booking_id=booking.id, **_to_values(booking))
        )

    def get(self, booking_id: str) -> Booking | None:
        stmt = select(bookings).where(bookings.c.booking_id == booking_id)
        if not (row := self.connection.execute(stmt).fetchone()):
            return None
        return _to_booking(row)

    def update(self, booking: Booking) -> None:
        result = self.connection.execute(
            update(bookings)
            .where(bookings.c.booking_id == booking.id)
            .values(**_to_values(booking))
        )
        if result.rowcount != 1:
            raise BookingNotFoundError(booking.id)

    def list_for_artist(self, artist_id: str) -> list[Booking]:
        stmt = (
            select(bookings)
            .where(bookings.c.artist_id == artist_id)
            .order_by(bookings.c.event_date, bookings.c.created_at)
        )
        return [_to_booking(row) for row in self.connection.execute(stmt)]

    def list_for_venue(self, venue_id: str) -> list[Booking]:
        stmt = (
            select(bookings)
            .where(bookings.c.venue_id == venue_id)
            .order_by(bookings.c.event_date, bookings.c.created_at)
        )
        return [_to_booking(row) for row in self.connection.execute(stmt)]
