"""Python API for the availability and booking admission core.

``AvailabilityAPI`` is the surface the venue-facing and artist-facing clients
call. Dates may be passed as ``date`` objects or ISO-8601 strings; statuses
as enum members or their string values.

Example:
    ```python
    api = AvailabilityAPI(bootstrap_in_memory())
    api.create_block("7", "2026-03-01", "2026-03-05", "Tour")
    api.is_date_blocked("7", "2026-03-03")  # True
    ```
"""

from __future__ import annotations

import datetime
from collections.abc import Iterable, Mapping
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any

from gigcal.domain.dates import to_date
from gigcal.domain.errors import ValidationError
from gigcal.service_layer import commands, queries

if TYPE_CHECKING:
    from gigcal.bootstrap import AppContainer
    from gigcal.domain.booking import Booking
    from gigcal.domain.value_objects import (
        AvailabilityBlock,
        AvailabilityEntry,
        AvailabilityStatus,
        BlockedRange,
        BookingStatus,
        Recurrence,
    )
    from gigcal.service_layer.handlers.sync_handlers import ImportReport

DateLike = datetime.date | datetime.datetime | str


class AvailabilityAPI:
    """Booking and availability operations over a wired application."""

    def __init__(self, app: AppContainer) -> None:
        self._app = app
        self._bus = app.message_bus
        self._uow_factory = app.uow_factory

    # --- booking surface ---

    def create_booking(  # pylint: disable=too-many-arguments
        self,
        artist_id: str,
        venue_id: str,
        event_date: DateLike,
        event_end_date: DateLike | None = None,
        *,
        event_time: str | None = None,
        venue_name: str | None = None,
        venue_address: str | None = None,
        event_details: str | None = None,
        total_fee: Decimal | str | None = None,
        deposit_amount: Decimal | str | None = None,
    ) -> Booking:
        """Admit a booking request as ``pending``.

        Raises:
            ConflictError: if any requested date is blocked.
            ValidationError: for a malformed date or range.
        """
        return self._bus.handle(
            commands.CreateBooking(
                artist_id=artist_id,
                venue_id=venue_id,
                event_date=to_date(event_date),
                event_end_date=(
                    to_date(event_end_date) if event_end_date is not None else None
                ),
                event_time=event_time,
                venue_name=venue_name,
                venue_address=venue_address,
                event_details=event_details,
                total_fee=_money(total_fee),
                deposit_amount=_money(deposit_amount),
            )
        )

    def update_booking_status(
        self, booking_id: str, status: BookingStatus | str
    ) -> Booking:
        """Move a booking along its lifecycle."""
        return self._bus.handle(commands.UpdateBookingStatus(booking_id, status))

    def get_booking(self, booking_id: str) -> Booking:
        return queries.get_booking(booking_id, self._uow_factory)

    def list_bookings_for_artist(self, artist_id: str) -> list[Booking]:
        return queries.list_bookings_for_artist(artist_id, self._uow_factory)

    def list_bookings_for_venue(self, venue_id: str) -> list[Booking]:
        return queries.list_bookings_for_venue(venue_id, self._uow_factory)

    # --- availability surface ---

    def set_availability(
        self,
        artist_id: str,
        date: DateLike,
        status: AvailabilityStatus | str,
        notes: str | None = None,
    ) -> AvailabilityEntry:
        return self._bus.handle(
            commands.SetAvailability(artist_id, to_date(date), status, notes)
        )

    def clear_availability(self, artist_id: str, date: DateLike) -> bool:
        return self._bus.handle(commands.ClearAvailability(artist_id, to_date(date)))

    def create_block(  # pylint: disable=too-many-arguments
        self,
        artist_id: str,
        start: DateLike,
        end: DateLike,
        reason: str,
        recurring: Recurrence | None = None,
    ) -> str:
        """Create a block and return its id."""
        block: AvailabilityBlock = self._bus.handle(
            commands.CreateBlock(
                artist_id, to_date(start), to_date(end), reason, recurring
            )
        )
        return block.id

    def delete_block(self, artist_id: str, block_id: str) -> bool:
        return self._bus.handle(commands.DeleteBlock(artist_id, block_id))

    def list_blocks(self, artist_id: str) -> list[AvailabilityBlock]:
        return queries.list_blocks(artist_id, self._uow_factory)

    def get_availability(
        self, artist_id: str, start: DateLike, end: DateLike
    ) -> list[AvailabilityEntry]:
        return queries.get_availability(
            artist_id, to_date(start), to_date(end), self._uow_factory
        )

    def get_blocked_ranges(
        self, artist_id: str, start: DateLike, end: DateLike
    ) -> list[BlockedRange]:
        return queries.get_blocked_ranges(
            artist_id, to_date(start), to_date(end), self._uow_factory
        )

    # --- conflict checks ---

    def is_date_blocked(self, artist_id: str, date: DateLike) -> bool:
        return queries.is_date_blocked(artist_id, to_date(date), self._uow_factory)

    def can_book_artist(self, artist_id: str, start: DateLike, end: DateLike) -> bool:
        return queries.can_book_artist(
            artist_id, to_date(start), to_date(end), self._uow_factory
        )

    def reconcile_calendar(self, artist_id: str) -> list[queries.CalendarDrift]:
        """Dates where ``booked`` entries and confirmed bookings disagree."""
        return queries.reconcile_calendar(artist_id, self._uow_factory)

    # --- external calendars ---

    def import_calendar_events(
        self, artist_id: str, events: Iterable[Mapping[str, Any]]
    ) -> ImportReport:
        return self._bus.handle(
            commands.ImportCalendarEvents(artist_id, tuple(events))
        )

    def export_blocks_as_ical(
        self, artist_id: str, now: datetime.datetime | None = None
    ) -> str:
        return queries.export_blocks_as_ical(
            artist_id,
            self._uow_factory,
            product=self._app.ical_product,
            domain=self._app.ical_domain,
            now=now,
        )


def _money(value: Decimal | str | None) -> Decimal | None:
    if value is None:
        return None
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise ValidationError(f"Malformed amount: {value!r}") from e
