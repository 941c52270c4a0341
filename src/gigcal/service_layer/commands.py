"""Module defining Commands.

Commands are plain immutable requests; the message bus routes each one to a
single handler and returns whatever the handler returns.
"""

from __future__ import annotations

import datetime
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from gigcal.domain.value_objects import (
    AvailabilityStatus,
    BookingStatus,
    Recurrence,
)

# pylint: disable=too-many-instance-attributes


@dataclass(frozen=True)
class Command:
    """Base class for all commands."""


# --- bookings ---


@dataclass(frozen=True)
class CreateBooking(Command):
    """A venue asks to book an artist for one or more consecutive days."""

    artist_id: str
    venue_id: str
    event_date: datetime.date
    event_end_date: datetime.date | None = None
    event_time: str | None = None
    venue_name: str | None = None
    venue_address: str | None = None
    event_details: str | None = None
    total_fee: Decimal | None = None
    deposit_amount: Decimal | None = None


@dataclass(frozen=True)
class UpdateBookingStatus(Command):
    """Move a booking along its lifecycle."""

    booking_id: str
    status: BookingStatus | str


# --- calendar ---


@dataclass(frozen=True)
class SetAvailability(Command):
    """Write an explicit status for an artist on a date."""

    artist_id: str
    date: datetime.date
    status: AvailabilityStatus | str
    notes: str | None = None


@dataclass(frozen=True)
class ClearAvailability(Command):
    """Remove an artist's explicit entry for a date."""

    artist_id: str
    date: datetime.date


# --- blocks ---


@dataclass(frozen=True)
class CreateBlock(Command):
    """Declare a blackout range, optionally recurring."""

    artist_id: str
    start_date: datetime.date
    end_date: datetime.date
    reason: str
    recurring: Recurrence | None = None


@dataclass(frozen=True)
class DeleteBlock(Command):
    """Remove one of an artist's blocks."""

    artist_id: str
    block_id: str


@dataclass(frozen=True)
class ImportCalendarEvents(Command):
    """Turn third-party calendar events into blocks."""

    artist_id: str
    events: tuple[Mapping[str, Any], ...]
