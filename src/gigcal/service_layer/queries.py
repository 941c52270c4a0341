"""Read-side queries.

Queries open their own unit of work, take no artist lock and never commit.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from gigcal.domain.dates import daterange, require_range
from gigcal.domain.errors import BookingNotFoundError
from gigcal.domain.value_objects import AvailabilityStatus, BookingStatus
from gigcal.service_layer import ical
from gigcal.service_layer.conflicts import ConflictResolver

if TYPE_CHECKING:
    from gigcal.domain.booking import Booking
    from gigcal.domain.value_objects import (
        AvailabilityBlock,
        AvailabilityEntry,
        BlockedRange,
    )
    from gigcal.service_layer.messagebus import UnitOfWorkFactory

# Statuses whose dates stay ``booked`` on the calendar.
CALENDAR_HOLDING_STATUSES = frozenset(
    {BookingStatus.CONFIRMED, BookingStatus.COMPLETED}
)


def get_availability(
    artist_id: str,
    start: datetime.date,
    end: datetime.date,
    uow_factory: UnitOfWorkFactory,
) -> list[AvailabilityEntry]:
    """Explicit entries in ``[start, end]``, ordered by date."""
    require_range(start, end)
    with uow_factory() as uow:
        return uow.calendar.query_range(artist_id, start, end)


def list_blocks(artist_id: str, uow_factory: UnitOfWorkFactory) -> list[AvailabilityBlock]:
    """The artist's blocks in creation order."""
    with uow_factory() as uow:
        return uow.blocks.list_blocks(artist_id)


def get_blocked_ranges(
    artist_id: str,
    start: datetime.date,
    end: datetime.date,
    uow_factory: UnitOfWorkFactory,
) -> list[BlockedRange]:
    """Blocked ranges the artist's blocks contribute to ``[start, end]``."""
    require_range(start, end)
    with uow_factory() as uow:
        return uow.blocks.get_blocked_ranges(artist_id, start, end)


def is_date_blocked(
    artist_id: str, day: datetime.date, uow_factory: UnitOfWorkFactory
) -> bool:
    with uow_factory() as uow:
        return ConflictResolver(uow.calendar, uow.blocks).is_date_blocked(
            artist_id, day
        )


def can_book_artist(
    artist_id: str,
    start: datetime.date,
    end: datetime.date,
    uow_factory: UnitOfWorkFactory,
) -> bool:
    require_range(start, end)
    with uow_factory() as uow:
        return ConflictResolver(uow.calendar, uow.blocks).can_book_artist(
            artist_id, start, end
        )


def first_conflict(
    artist_id: str,
    start: datetime.date,
    end: datetime.date,
    uow_factory: UnitOfWorkFactory,
) -> tuple[datetime.date, str] | None:
    """Earliest blocked date in the range with its reason, or None."""
    require_range(start, end)
    with uow_factory() as uow:
        resolver = ConflictResolver(uow.calendar, uow.blocks)
        if (day := resolver.first_conflict(artist_id, start, end)) is None:
            return None
        return day, resolver.describe(artist_id, day)


def get_booking(booking_id: str, uow_factory: UnitOfWorkFactory) -> Booking:
    """Raises BookingNotFoundError for an unknown id."""
    with uow_factory() as uow:
        if (booking := uow.bookings.get(booking_id)) is None:
            raise BookingNotFoundError(booking_id)
        return booking


def list_bookings_for_artist(
    artist_id: str, uow_factory: UnitOfWorkFactory
) -> list[Booking]:
    with uow_factory() as uow:
        return uow.bookings.list_for_artist(artist_id)


def list_bookings_for_venue(
    venue_id: str, uow_factory: UnitOfWorkFactory
) -> list[Booking]:
    with uow_factory() as uow:
        return uow.bookings.list_for_venue(venue_id)


def export_blocks_as_ical(
    artist_id: str,
    uow_factory: UnitOfWorkFactory,
    *,
    product: str,
    domain: str,
    now: datetime.datetime | None = None,
) -> str:
    """One VEVENT per stored block of the artist."""
    blocks = list_blocks(artist_id, uow_factory)
    return ical.render_blocks(
        blocks,
        product=product,
        domain=domain,
        now=now or datetime.datetime.now(datetime.timezone.utc),
    )


# ============================================================================
#                           Calendar reconciliation
# ============================================================================


class DriftKind(str, Enum):
    """Ways the calendar can disagree with the bookings that should hold it."""

    ORPHANED_BOOKED_ENTRY = "orphaned_booked_entry"
    MISSING_BOOKED_ENTRY = "missing_booked_entry"


@dataclass(frozen=True)
class CalendarDrift:
    """One date where the calendar and the bookings disagree.

    Attributes:
        kind: What is wrong.
        artist_id: Artist whose calendar drifted.
        date: Affected date.
        booking_id: For an orphaned entry, the booking recorded on it (if
            any); for a missing entry, the booking that should hold the date.
    """

    kind: DriftKind
    artist_id: str
    date: datetime.date
    booking_id: str | None


def reconcile_calendar(
    artist_id: str,
    uow_factory: UnitOfWorkFactory,
    start: datetime.date = datetime.date.min,
    end: datetime.date = datetime.date.max,
) -> list[CalendarDrift]:
    """Compare ``booked`` entries with confirmed and completed bookings.

    Reports ``booked`` entries that no such booking holds, and dates of such
    bookings that are not marked ``booked`` by them. Nothing is repaired.
    The result is ordered by date.
    """
    require_range(start, end)
    with uow_factory() as uow:
        entries = uow.calendar.query_range(artist_id, start, end)
        bookings = [
            booking
            for booking in uow.bookings.list_for_artist(artist_id)
            if booking.status in CALENDAR_HOLDING_STATUSES
        ]

    holders: dict[datetime.date, set[str]] = {}
    for booking in bookings:
        for day in daterange(max(booking.event_date, start), min(booking.last_date, end)):
            holders.setdefault(day, set()).add(booking.id)

    booked = {e.date: e for e in entries if e.status is AvailabilityStatus.BOOKED}
    drift: list[CalendarDrift] = []

    for day, entry in booked.items():
        if entry.booking_id not in holders.get(day, set()):
            drift.append(
                CalendarDrift(
                    DriftKind.ORPHANED_BOOKED_ENTRY, artist_id, day, entry.booking_id
                )
            )

    for day, booking_ids in holders.items():
        entry = booked.get(day)
        for booking_id in sorted(booking_ids):
            if entry is None or entry.booking_id != booking_id:
                drift.append(
                    CalendarDrift(
                        DriftKind.MISSING_BOOKED_ENTRY, artist_id, day, booking_id
                    )
                )

    return sorted(drift, key=lambda d: (d.date, d.kind.value))
