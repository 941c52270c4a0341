"""In-memory BookingStore implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gigcal.domain.errors import BookingNotFoundError
from gigcal.interfaces.booking_store import BookingStore

if TYPE_CHECKING:
    from gigcal.domain.booking import Booking

    from .store import InMemoryAvailabilityData


class InMemoryBookingStore(BookingStore):
    """In-memory implementation of the BookingStore interface."""

    def __init__(self, data: InMemoryAvailabilityData) -> None:
        self._data = data

    def add(self, booking: Booking) -> None:
        if booking.id in self._data.booking_artists:
            raise ValueError(f"duplicate booking id {booking.id}")
        self._data.bookings.setdefault(booking.artist_id, {})[booking.id] = booking
        self._data.booking_artists[booking.id] = booking.artist_id

    def get(self, booking_id: str) -> Booking | None:
        if (artist_id := self._data.booking_artists.get(booking_id)) is None:
            return None
        return self._data.bookings.get(artist_id, {}).get(booking_id)

    def update(self, booking: Booking) -> None:
        if self.get(booking.id) is None:
            raise BookingNotFoundError(booking.id)
        self._data.bookings[booking.artist_id][booking.id] = booking

    def list_for_artist(self, artist_id: str) -> list[Booking]:
        bookings = self._data.bookings.get(artist_id, {}).values()
        return sorted(bookings, key=lambda b: (b.event_date, b.created_at))

    def list_for_venue(self, venue_id: str) -> list[Booking]:
        bookings = [
            booking
            for partition in list(self._data.bookings.values())
            for booking in list(partition.values())
            if booking.venue_id == venue_id
        ]
        return sorted(bookings, key=lambda b: (b.event_date, b.created_at))
