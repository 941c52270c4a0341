"""Interface for booking persistence."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gigcal.domain.booking import Booking


class BookingStore(abc.ABC):
    """Stores bookings by id."""

    @abc.abstractmethod
    def add(self, booking: Booking) -> None:
        """Persist a new booking.

        Raises:
            ValueError: if a booking with the same id already exists.
        """

    @abc.abstractmethod
    def get(self, booking_id: str) -> Booking | None:
        """Return the booking with the given id, or ``None``."""

    @abc.abstractmethod
    def update(self, booking: Booking) -> None:
        """Replace a stored booking with a newer copy of itself.

        Raises:
            BookingNotFoundError: if the booking was never added.
        """

    @abc.abstractmethod
    def list_for_artist(self, artist_id: str) -> list[Booking]:
        """Return the artist's bookings ordered by event date."""

    @abc.abstractmethod
    def list_for_venue(self, venue_id: str) -> list[Booking]:
        """Return the venue's bookings ordered by event date."""
