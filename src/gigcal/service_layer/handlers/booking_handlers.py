"""Handlers for the booking lifecycle.

Admission runs the conflict check and the insert under the artist lock, so
two venues racing for the same date cannot both be admitted. Calendar
write-back happens in the same unit of work as the status change.
Notifications go out after commit; a failed notification is logged and
never undoes the transition.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from gigcal.domain.booking import Booking
from gigcal.domain.dates import require_range
from gigcal.domain.errors import BookingNotFoundError, ConflictError
from gigcal.domain.value_objects import (
    AvailabilityEntry,
    AvailabilityStatus,
    BookingStatus,
)
from gigcal.interfaces.notifier import NotificationError, StatusChangeNotice
from gigcal.service_layer import commands
from gigcal.service_layer.conflicts import ConflictResolver

if TYPE_CHECKING:
    from gigcal.interfaces.id_generator import IdGenerator
    from gigcal.interfaces.notifier import Notifier, PartyDirectory
    from gigcal.interfaces.unit_of_work import AbstractUnitOfWork
    from gigcal.service_layer.messagebus import UnitOfWorkFactory

logger = logging.getLogger(__name__)


def create_booking(
    cmd: commands.CreateBooking,
    uow_factory: UnitOfWorkFactory,
    id_generator: IdGenerator,
    notifier: Notifier,
    directory: PartyDirectory,
) -> Booking:
    """Admit a booking request as ``pending``.

    Raises:
        InvalidDateRangeError: if the event ends before it starts.
        ConflictError: if any date in the range is blocked; nothing is written.
    """
    require_range(cmd.event_date, cmd.event_end_date or cmd.event_date)
    booking = Booking(
        id=id_generator.new_id(),
        artist_id=cmd.artist_id,
        venue_id=cmd.venue_id,
        event_date=cmd.event_date,
        event_end_date=cmd.event_end_date,
        event_time=cmd.event_time,
        venue_name=cmd.venue_name,
        venue_address=cmd.venue_address,
        event_details=cmd.event_details,
        total_fee=cmd.total_fee,
        deposit_amount=cmd.deposit_amount,
    )

    with uow_factory() as uow:
        uow.lock_artist(booking.artist_id)
        resolver = ConflictResolver(uow.calendar, uow.blocks)
        conflict = resolver.first_conflict(
            booking.artist_id, booking.event_date, booking.last_date
        )
        if conflict is not None:
            reason = resolver.describe(booking.artist_id, conflict)
            logger.info(
                "Rejected booking request from venue %s for artist %s on %s: %s",
                booking.venue_id,
                booking.artist_id,
                conflict,
                reason,
            )
            raise ConflictError(booking.artist_id, conflict, reason)
        uow.bookings.add(booking)
        uow.commit()

    logger.info(
        "Booking %s admitted: artist %s, venue %s, %s - %s",
        booking.id,
        booking.artist_id,
        booking.venue_id,
        booking.event_date,
        booking.last_date,
    )
    _notify(notifier, directory, booking, previous_status=None)
    return booking


def update_booking_status(
    cmd: commands.UpdateBookingStatus,
    uow_factory: UnitOfWorkFactory,
    notifier: Notifier,
    directory: PartyDirectory,
) -> Booking:
    """Apply a lifecycle transition and write the calendar back.

    Asking for the booking's current status changes nothing and sends no
    notification.

    Raises:
        ValidationError: if the status is unknown.
        BookingNotFoundError: if the booking does not exist.
        InvalidTransitionError: if the lifecycle does not allow the move.
        ConflictError: if confirming would take a date booked by another booking.
    """
    target = BookingStatus.parse(cmd.status)

    with uow_factory() as uow:
        booking = _get_locked(uow, cmd.booking_id)
        previous_status = booking.status
        updated = booking.transition_to(target)
        if updated is booking:
            logger.debug("Booking %s is already %s", booking.id, target.value)
            return booking

        if target is BookingStatus.CONFIRMED:
            _mark_booked(uow, updated)
        elif (
            target is BookingStatus.CANCELLED
            and previous_status is BookingStatus.CONFIRMED
        ):
            _release(uow, updated)

        uow.bookings.update(updated)
        uow.commit()

    logger.info(
        "Booking %s moved %s -> %s",
        updated.id,
        previous_status.value,
        updated.status.value,
    )
    _notify(notifier, directory, updated, previous_status=previous_status)
    return updated


def _get_locked(uow: AbstractUnitOfWork, booking_id: str) -> Booking:
    """Load a booking, lock its artist, then re-read it under the lock."""
    if (booking := uow.bookings.get(booking_id)) is None:
        raise BookingNotFoundError(booking_id)
    uow.lock_artist(booking.artist_id)
    if (booking := uow.bookings.get(booking_id)) is None:  # pragma: no cover
        raise BookingNotFoundError(booking_id)
    return booking


def _mark_booked(uow: AbstractUnitOfWork, booking: Booking) -> None:
    days = booking.dates()
    for day in days:
        entry = uow.calendar.get(booking.artist_id, day)
        if (
            entry is not None
            and entry.status is AvailabilityStatus.BOOKED
            and entry.booking_id not in (None, booking.id)
        ):
            raise ConflictError(
                booking.artist_id, day, f"already booked by {entry.booking_id}"
            )
    for day in days:
        uow.calendar.set(
            AvailabilityEntry(
                artist_id=booking.artist_id,
                date=day,
                status=AvailabilityStatus.BOOKED,
                booking_id=booking.id,
            )
        )


def _release(uow: AbstractUnitOfWork, booking: Booking) -> None:
    for day in booking.dates():
        entry = uow.calendar.get(booking.artist_id, day)
        if (
            entry is None
            or entry.status is not AvailabilityStatus.BOOKED
            or entry.booking_id != booking.id
        ):
            logger.debug(
                "Leaving %s for artist %s as is; not held by booking %s",
                day,
                booking.artist_id,
                booking.id,
            )
            continue
        uow.calendar.set(
            AvailabilityEntry(
                artist_id=booking.artist_id,
                date=day,
                status=AvailabilityStatus.AVAILABLE,
            )
        )


def _notify(
    notifier: Notifier,
    directory: PartyDirectory,
    booking: Booking,
    previous_status: BookingStatus | None,
) -> None:
    notice = StatusChangeNotice(
        booking=booking,
        previous_status=previous_status,
        artist=directory.artist(booking.artist_id),
        venue=directory.venue(booking.venue_id),
    )
    try:
        notifier.booking_status_changed(notice)
    except NotificationError:
        logger.exception(
            "Notification for booking %s (%s) failed",
            booking.id,
            booking.status.value,
        )


COMMAND_HANDLERS: dict[type, Callable[..., object]] = {
    commands.CreateBooking: create_booking,
    commands.UpdateBookingStatus: update_booking_status,
}
