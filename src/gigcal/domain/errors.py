"""Domain-layer error definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import datetime

# ============================================================================
#                           General domain errors
# ============================================================================


class DomainError(Exception):
    """Base class for domain-layer errors."""


class ValidationError(DomainError):
    """Raised when a request is malformed and rejected before any store access."""


class InvalidDateRangeError(ValidationError):
    """Raised when a date range ends before it starts."""

    def __init__(self, start: datetime.date, end: datetime.date) -> None:
        super().__init__(f"Invalid date range: end {end} is before start {start}.")
        self.start = start
        self.end = end


class InvalidTransitionError(ValidationError):
    """Raised when a booking is asked to move to a status it cannot reach."""

    def __init__(self, booking_id: str, current: str, target: str) -> None:
        super().__init__(
            f"Invalid booking transition for {booking_id}: {current} -> {target}"
        )
        self.booking_id = booking_id
        self.current = current
        self.target = target


class ConflictError(DomainError):
    """Raised when a booking would overlap a blocked or committed date."""

    def __init__(self, artist_id: str, day: datetime.date, reason: str) -> None:
        super().__init__(f"Artist {artist_id} cannot be booked on {day}: {reason}.")
        self.artist_id = artist_id
        self.day = day
        self.reason = reason


class NotFoundError(DomainError):
    """Raised when an identifier does not resolve to a stored record."""

    def __init__(self, kind: str, identifier: str) -> None:
        super().__init__(f"{kind} with ID '{identifier}' not found")
        self.kind = kind
        self.identifier = identifier


# ============================================================================
#                           Booking related errors
# ============================================================================


class BookingNotFoundError(NotFoundError):
    """Raised when a booking id is unknown."""

    def __init__(self, booking_id: str) -> None:
        super().__init__("Booking", booking_id)
        self.booking_id = booking_id
