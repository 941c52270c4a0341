"""Booking aggregate and its lifecycle state machine."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field, replace
from decimal import Decimal

from gigcal.domain.dates import daterange, require_range
from gigcal.domain.errors import InvalidTransitionError
from gigcal.domain.value_objects import BookingStatus, PaymentStatus

BOOKING_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset(
        {BookingStatus.CONFIRMED, BookingStatus.CANCELLED}
    ),
    BookingStatus.CONFIRMED: frozenset(
        {BookingStatus.COMPLETED, BookingStatus.CANCELLED}
    ),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}

TERMINAL_STATUSES = frozenset(
    status for status, targets in BOOKING_TRANSITIONS.items() if not targets
)


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


@dataclass(frozen=True)
class Booking:  # pylint: disable=too-many-instance-attributes
    """A venue's request to book an artist for an event.

    Single-day events are the common case; ``event_end_date`` extends the
    booking over several days and defaults to ``event_date``.
    """

    id: str
    artist_id: str
    venue_id: str
    event_date: datetime.date
    status: BookingStatus = BookingStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.UNPAID
    event_end_date: datetime.date | None = None
    event_time: str | None = None
    venue_name: str | None = None
    venue_address: str | None = None
    event_details: str | None = None
    total_fee: Decimal | None = None
    deposit_amount: Decimal | None = None
    created_at: datetime.datetime = field(default_factory=_utcnow)
    updated_at: datetime.datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        object.__setattr__(self, "status", BookingStatus.parse(self.status))
        object.__setattr__(
            self, "payment_status", PaymentStatus.parse(self.payment_status)
        )
        require_range(self.event_date, self.last_date)

    @property
    def last_date(self) -> datetime.date:
        """Final day of the event (inclusive)."""
        return self.event_end_date or self.event_date

    def dates(self) -> list[datetime.date]:
        """Every calendar date the booking occupies."""
        return list(daterange(self.event_date, self.last_date))

    @property
    def is_terminal(self) -> bool:
        """True once the booking can no longer change status."""
        return self.status in TERMINAL_STATUSES

    def transition_to(self, target: BookingStatus | str) -> Booking:
        """Return a copy of the booking moved to ``target``.

        Requesting the current status returns the booking unchanged.

        Raises:
            ValidationError: if ``target`` is not a booking status.
            InvalidTransitionError: if the lifecycle does not allow the move.
        """
        target = BookingStatus.parse(target)
        if target == self.status:
            return self
        if target not in BOOKING_TRANSITIONS[self.status]:
            raise InvalidTransitionError(self.id, self.status.value, target.value)
        return replace(self, status=target, updated_at=_utcnow())
