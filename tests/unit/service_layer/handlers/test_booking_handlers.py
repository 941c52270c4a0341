"""Booking admission and lifecycle through the wired application."""

from __future__ import annotations

import logging
from decimal import Decimal

import pytest

from gigcal.bootstrap import bootstrap_in_memory
from gigcal.domain.errors import (
    BookingNotFoundError,
    ConflictError,
    InvalidDateRangeError,
    InvalidTransitionError,
    ValidationError,
)
from gigcal.domain.value_objects import AvailabilityStatus, BookingStatus
from gigcal.entrypoints.api import AvailabilityAPI
from gigcal.interfaces.notifier import NotificationError, Notifier
from tests.fixtures.datagen import d

# pylint: disable=redefined-outer-name


def statuses(api, start="2026-04-01", end="2026-04-30"):
    """Explicit calendar statuses of artist 7 keyed by ISO date."""
    return {
        e.date.isoformat(): e.status.value for e in api.get_availability("7", start, end)
    }


# --- admission ---


def test_request_is_admitted_as_pending(api, notifier):
    booking = api.create_booking(
        "7", "v1", "2026-04-10", venue_name="Blue Room", total_fee="1200.50"
    )
    assert booking.status is BookingStatus.PENDING
    assert booking.total_fee == Decimal("1200.50")
    assert api.get_booking(booking.id) == booking
    assert not statuses(api)  # pending bookings do not touch the calendar

    [notice] = notifier.notices
    assert notice.previous_status is None
    assert notice.booking.id == booking.id
    assert notice.artist.name == "Nina Keys"
    assert notice.venue.name == "Blue Room"


def test_request_on_blocked_date_is_rejected(api, notifier):
    api.create_block("7", "2026-04-08", "2026-04-12", "Tour")
    with pytest.raises(ConflictError) as excinfo:
        api.create_booking("7", "v1", "2026-04-10")
    assert excinfo.value.day == d("2026-04-10")
    assert excinfo.value.reason == "blocked (Tour)"
    assert not api.list_bookings_for_artist("7")
    assert not notifier.notices


def test_multi_day_request_reports_first_blocked_day(api):
    api.set_availability("7", "2026-04-12", "unavailable")
    with pytest.raises(ConflictError) as excinfo:
        api.create_booking("7", "v1", "2026-04-10", "2026-04-13")
    assert excinfo.value.day == d("2026-04-12")
    assert excinfo.value.reason == "date is marked unavailable"


def test_reversed_event_range_is_rejected(api):
    with pytest.raises(InvalidDateRangeError):
        api.create_booking("7", "v1", "2026-04-10", "2026-04-09")


def test_pending_requests_do_not_block_each_other(api):
    first = api.create_booking("7", "v1", "2026-04-10")
    second = api.create_booking("7", "v2", "2026-04-10")
    assert first.id != second.id
    assert {b.id for b in api.list_bookings_for_artist("7")} == {first.id, second.id}


# --- lifecycle ---


def test_confirm_marks_every_date_booked(api, notifier):
    booking = api.create_booking("7", "v1", "2026-04-10", "2026-04-11")
    confirmed = api.update_booking_status(booking.id, "confirmed")

    assert confirmed.status is BookingStatus.CONFIRMED
    assert statuses(api) == {"2026-04-10": "booked", "2026-04-11": "booked"}
    assert all(
        e.booking_id == booking.id
        for e in api.get_availability("7", "2026-04-10", "2026-04-11")
    )
    assert [n.previous_status for n in notifier.notices] == [
        None,
        BookingStatus.PENDING,
    ]


def test_confirmed_date_rejects_new_requests(api):
    booking = api.create_booking("7", "v1", "2026-04-10")
    api.update_booking_status(booking.id, "confirmed")
    with pytest.raises(ConflictError, match="date is marked booked"):
        api.create_booking("7", "v2", "2026-04-10")


def test_second_confirmation_on_the_same_date_conflicts(api):
    first = api.create_booking("7", "v1", "2026-04-10")
    second = api.create_booking("7", "v2", "2026-04-10")
    api.update_booking_status(first.id, "confirmed")
    with pytest.raises(ConflictError, match=f"already booked by {first.id}"):
        api.update_booking_status(second.id, "confirmed")
    assert api.get_booking(second.id).status is BookingStatus.PENDING


def test_confirming_twice_is_a_no_op(api, notifier):
    booking = api.create_booking("7", "v1", "2026-04-10")
    api.update_booking_status(booking.id, "confirmed")
    again = api.update_booking_status(booking.id, BookingStatus.CONFIRMED)
    assert again.status is BookingStatus.CONFIRMED
    assert len(notifier.notices) == 2


def test_cancel_confirmed_reopens_owned_dates_only(api):
    booking = api.create_booking("7", "v1", "2026-04-10", "2026-04-12")
    api.update_booking_status(booking.id, "confirmed")
    # The artist overrides one day by hand after confirmation.
    api.set_availability("7", "2026-04-11", "unavailable", notes="Sick")

    api.update_booking_status(booking.id, "cancelled")

    assert statuses(api) == {
        "2026-04-10": "available",
        "2026-04-11": "unavailable",
        "2026-04-12": "available",
    }


def test_cancel_pending_leaves_calendar_alone(api):
    api.set_availability("7", "2026-04-10", "unavailable")
    booking = api.create_booking("7", "v1", "2026-04-11")
    api.update_booking_status(booking.id, "cancelled")
    assert statuses(api) == {"2026-04-10": "unavailable"}


def test_complete_keeps_dates_booked(api):
    booking = api.create_booking("7", "v1", "2026-04-10")
    api.update_booking_status(booking.id, "confirmed")
    api.update_booking_status(booking.id, "completed")
    assert statuses(api) == {"2026-04-10": "booked"}


@pytest.mark.parametrize("terminal", ["cancelled", "completed"])
def test_terminal_bookings_cannot_move(api, terminal):
    booking = api.create_booking("7", "v1", "2026-04-10")
    api.update_booking_status(booking.id, "confirmed")
    api.update_booking_status(booking.id, terminal)
    with pytest.raises(InvalidTransitionError):
        api.update_booking_status(booking.id, "pending")


@pytest.mark.parametrize("terminal", ["cancelled", "completed"])
def test_repeating_a_terminal_status_is_a_no_op(api, notifier, terminal):
    booking = api.create_booking("7", "v1", "2026-04-10")
    api.update_booking_status(booking.id, "confirmed")
    api.update_booking_status(booking.id, terminal)
    stored = api.get_booking(booking.id)
    calendar = statuses(api)

    again = api.update_booking_status(booking.id, terminal)

    assert again.status is BookingStatus(terminal)
    assert api.get_booking(booking.id) == stored
    assert statuses(api) == calendar
    assert len(notifier.notices) == 3


def test_pending_cannot_complete(api):
    booking = api.create_booking("7", "v1", "2026-04-10")
    with pytest.raises(InvalidTransitionError):
        api.update_booking_status(booking.id, "completed")


def test_unknown_status_is_rejected(api):
    booking = api.create_booking("7", "v1", "2026-04-10")
    with pytest.raises(ValidationError):
        api.update_booking_status(booking.id, "postponed")


def test_unknown_booking(api):
    with pytest.raises(BookingNotFoundError):
        api.update_booking_status("bkg-missing", "confirmed")
    with pytest.raises(BookingNotFoundError):
        api.get_booking("bkg-missing")


# --- notifications ---


class ExplodingNotifier(Notifier):
    """Notifier whose hand-off always fails."""

    def booking_status_changed(self, notice):
        raise NotificationError(f"mail relay down for {notice.booking.id}")


def test_failed_notification_is_logged_and_does_not_undo(caplog):
    api = AvailabilityAPI(bootstrap_in_memory(notifier=ExplodingNotifier()))
    with caplog.at_level(logging.ERROR):
        booking = api.create_booking("7", "v1", "2026-04-10")
        confirmed = api.update_booking_status(booking.id, "confirmed")

    assert confirmed.status is BookingStatus.CONFIRMED
    assert api.get_booking(booking.id).status is BookingStatus.CONFIRMED
    assert api.is_date_blocked("7", "2026-04-10")
    failures = [r for r in caplog.records if "Notification for booking" in r.getMessage()]
    assert len(failures) == 2
    assert all(r.exc_info for r in failures)


def test_calendar_status_after_confirm_is_booked(memory_api):
    booking = memory_api.create_booking("7", "v1", "2026-04-10")
    memory_api.update_booking_status(booking.id, "confirmed")
    [entry] = memory_api.get_availability("7", "2026-04-10", "2026-04-10")
    assert entry.status is AvailabilityStatus.BOOKED
