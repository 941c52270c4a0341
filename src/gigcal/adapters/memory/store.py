"""In-memory shared data store for the in-memory adapters."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import datetime

    from gigcal.domain.booking import Booking
    from gigcal.domain.value_objects import AvailabilityBlock, AvailabilityEntry


class ArtistLocks:
    """Arena of re-entrant locks, one per artist id.

    Locks are created on first use and kept for the lifetime of the arena.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.RLock] = {}

    def for_artist(self, artist_id: str) -> threading.RLock:
        """Return the lock serializing work for ``artist_id``."""
        with self._guard:
            if (lock := self._locks.get(artist_id)) is None:
                lock = self._locks[artist_id] = threading.RLock()
            return lock


@dataclass(frozen=True, slots=True)
class ArtistSnapshot:
    """Copy of one artist's partition, used to roll a unit of work back."""

    entries: dict[datetime.date, AvailabilityEntry]
    blocks: list[AvailabilityBlock]
    bookings: dict[str, Booking]


@dataclass(slots=True)
class InMemoryAvailabilityData:
    """Shared in-memory backing store for the in-memory adapters.

    A single shared instance should be passed to every adapter (and every
    unit of work) so they operate on one data source. All mappings are
    partitioned by artist id; ``booking_artists`` indexes booking ids to
    the artist partition that holds them.
    """

    # artist_id -> date -> entry
    entries: dict[str, dict[datetime.date, AvailabilityEntry]] = field(
        default_factory=dict
    )

    # artist_id -> blocks in creation order
    blocks: dict[str, list[AvailabilityBlock]] = field(default_factory=dict)

    # artist_id -> booking_id -> booking
    bookings: dict[str, dict[str, Booking]] = field(default_factory=dict)

    # booking_id -> artist_id
    booking_artists: dict[str, str] = field(default_factory=dict)

    locks: ArtistLocks = field(default_factory=ArtistLocks)

    def snapshot(self, artist_id: str) -> ArtistSnapshot:
        """Copy the artist's partition."""
        return ArtistSnapshot(
            entries=dict(self.entries.get(artist_id, {})),
            blocks=list(self.blocks.get(artist_id, [])),
            bookings=dict(self.bookings.get(artist_id, {})),
        )

    def restore(self, artist_id: str, snapshot: ArtistSnapshot) -> None:
        """Put the artist's partition back to ``snapshot``."""
        for booking_id in self.bookings.get(artist_id, {}):
            if booking_id not in snapshot.bookings:
                self.booking_artists.pop(booking_id, None)
        self.entries[artist_id] = dict(snapshot.entries)
        self.blocks[artist_id] = list(snapshot.blocks)
        self.bookings[artist_id] = dict(snapshot.bookings)
