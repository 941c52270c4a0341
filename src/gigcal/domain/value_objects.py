"""Module including value objects used across the domain layer."""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from enum import Enum

from gigcal.domain.dates import to_date
from gigcal.domain.errors import ValidationError


class _ParsableEnum(str, Enum):
    """String enum that converts raw request values with a ValidationError."""

    @classmethod
    def parse(cls, value: str | _ParsableEnum) -> _ParsableEnum:
        """Normalize a raw value (case-insensitive) into a member.

        Raises:
            ValidationError: if the value is not one of the members.
        """
        if isinstance(value, cls):
            return value
        raw = str(value or "").strip().lower()
        for member in cls:
            if member.value == raw:
                return member
        allowed = ", ".join(m.value for m in cls)
        raise ValidationError(
            f"Invalid {cls.__name__} {value!r}; expected one of: {allowed}"
        )


class AvailabilityStatus(_ParsableEnum):
    """Explicit per-date status an artist's calendar can hold."""

    AVAILABLE = "available"
    BOOKED = "booked"
    UNAVAILABLE = "unavailable"


class BookingStatus(_ParsableEnum):
    """Booking lifecycle states."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class PaymentStatus(_ParsableEnum):
    """Payment state recorded on a booking; owned by the payment collaborator."""

    UNPAID = "unpaid"
    DEPOSIT_PAID = "deposit_paid"
    PAID = "paid"
    REFUNDED = "refunded"


class RecurrencePattern(_ParsableEnum):
    """How a recurring block repeats."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


@dataclass(frozen=True)
class Recurrence:
    """Recurrence rule attached to an availability block.

    Attributes:
        pattern: daily, weekly or monthly.
        end_date: last date the rule can match; unbounded when None.
        days_of_week: weekdays for weekly rules, 0 = Sunday ... 6 = Saturday.
    """

    pattern: RecurrencePattern
    end_date: datetime.date | None = None
    days_of_week: tuple[int, ...] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "pattern", RecurrencePattern.parse(self.pattern))
        if self.end_date is not None:
            object.__setattr__(self, "end_date", to_date(self.end_date))
        if self.days_of_week is not None:
            try:
                days = tuple(int(d) for d in self.days_of_week)
            except (TypeError, ValueError) as e:
                raise ValidationError(
                    f"days_of_week must be a sequence of weekday numbers, "
                    f"got {self.days_of_week!r}"
                ) from e
            if any(not 0 <= d <= 6 for d in days):
                raise ValidationError(
                    f"days_of_week must be in 0..6 (0 = Sunday), got {days}"
                )
            object.__setattr__(self, "days_of_week", days)


@dataclass(frozen=True)
class AvailabilityEntry:
    """Explicit status of one artist on one date.

    ``booking_id`` names the booking that owns a ``booked`` slot.
    """

    artist_id: str
    date: datetime.date
    status: AvailabilityStatus
    notes: str | None = None
    booking_id: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "status", AvailabilityStatus.parse(self.status))


@dataclass(frozen=True)
class AvailabilityBlock:
    """An artist-declared range, possibly recurring, during which bookings are refused."""

    id: str
    artist_id: str
    start_date: datetime.date
    end_date: datetime.date
    reason: str
    created_at: datetime.datetime
    recurring: Recurrence | None = None


@dataclass(frozen=True)
class BlockedRange:
    """A contiguous blocked span reported for a query window."""

    start: datetime.date
    end: datetime.date
    reason: str


@dataclass(frozen=True)
class Party:
    """Identity of an artist or a venue as known to the notification side."""

    party_id: str
    name: str
    email: str | None = None
