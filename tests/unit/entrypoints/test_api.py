"""Scenarios against the Python API surface."""

from __future__ import annotations

import datetime
from decimal import Decimal

import pytest

from gigcal.domain.errors import ConflictError, ValidationError
from gigcal.domain.value_objects import AvailabilityStatus, BookingStatus, Recurrence
from tests.fixtures.datagen import d

NOW = datetime.datetime(2026, 1, 15, 9, 30, tzinfo=datetime.timezone.utc)


def test_tour_block(memory_api):
    memory_api.create_block("7", "2026-03-01", "2026-03-05", "Tour")
    assert memory_api.is_date_blocked("7", "2026-03-03") is True
    assert memory_api.is_date_blocked("7", "2026-03-06") is False


def test_weekend_block_from_a_saturday(memory_api):
    memory_api.create_block(
        "7",
        "2026-01-03",
        "2026-01-03",
        "Weekends",
        Recurrence(pattern="weekly", days_of_week=(0, 6)),
    )
    day = d("2026-01-04")
    for _ in range(120):
        weekend = day.isoweekday() in (6, 7)
        assert memory_api.is_date_blocked("7", day) is weekend
        day += datetime.timedelta(days=1)


def test_request_then_confirm(memory_api):
    booking = memory_api.create_booking("7", "v1", "2026-04-10")
    assert booking.status is BookingStatus.PENDING
    memory_api.update_booking_status(booking.id, "confirmed")
    [entry] = memory_api.get_availability("7", "2026-04-10", "2026-04-10")
    assert entry.status is AvailabilityStatus.BOOKED


def test_cancel_after_confirm_reopens_the_date(memory_api):
    booking = memory_api.create_booking("7", "v1", "2026-04-10")
    memory_api.update_booking_status(booking.id, "confirmed")
    memory_api.update_booking_status(booking.id, "cancelled")
    [entry] = memory_api.get_availability("7", "2026-04-10", "2026-04-10")
    assert entry.status is AvailabilityStatus.AVAILABLE
    # and the date can be requested again
    assert memory_api.create_booking("7", "v2", "2026-04-10").status is BookingStatus.PENDING


def test_conflict_leaves_calendar_unchanged(memory_api):
    memory_api.set_availability("7", "2026-04-09", "available")
    memory_api.create_block("7", "2026-04-10", "2026-04-10", "Rest")
    before = memory_api.get_availability("7", "2026-04-01", "2026-04-30")
    with pytest.raises(ConflictError):
        memory_api.create_booking("7", "v1", "2026-04-09", "2026-04-10")
    assert memory_api.get_availability("7", "2026-04-01", "2026-04-30") == before
    assert memory_api.list_bookings_for_venue("v1") == []


def test_booking_details_are_kept(memory_api):
    booking = memory_api.create_booking(
        "7",
        "v1",
        datetime.datetime(2026, 4, 10, 20, 0, tzinfo=datetime.timezone.utc),
        event_time="20:00",
        venue_name="Blue Room",
        venue_address="1 Main St",
        event_details="Two sets",
        total_fee=Decimal("900"),
        deposit_amount="250.00",
    )
    stored = memory_api.get_booking(booking.id)
    assert stored.event_date == d("2026-04-10")
    assert stored.event_time == "20:00"
    assert stored.deposit_amount == Decimal("250.00")
    assert memory_api.list_bookings_for_venue("v1") == [stored]


def test_malformed_money_is_rejected(memory_api):
    with pytest.raises(ValidationError, match="Malformed amount"):
        memory_api.create_booking("7", "v1", "2026-04-10", total_fee="a lot")


def test_export_has_one_event_per_block(memory_api):
    memory_api.create_block("7", "2026-03-01", "2026-03-05", "Tour")
    memory_api.create_block(
        "7", "2026-01-03", "2026-01-03", "Weekends", Recurrence(pattern="daily")
    )
    memory_api.create_block("8", "2026-03-01", "2026-03-05", "Other artist")
    text = memory_api.export_blocks_as_ical("7", now=NOW)
    assert text.count("BEGIN:VEVENT") == 2
    assert "UID:block-blk-00000001@gigcal.test" in text
    assert "PRODID:-//Gigcal//Artist Availability Blocks//EN" in text
    assert "Other artist" not in text
