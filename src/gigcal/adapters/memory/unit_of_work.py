"""In-memory Unit of Work for GIGCAL.

Writes land in the shared ``InMemoryAvailabilityData`` immediately. When an
artist is locked, the unit of work snapshots that artist's partition; a
rollback restores every snapshot taken since the last commit.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gigcal.interfaces.unit_of_work import AbstractUnitOfWork

from .blocks import InMemoryBlockRegistry
from .bookings import InMemoryBookingStore
from .calendar import InMemoryCalendarStore

if TYPE_CHECKING:
    import threading

    from gigcal.interfaces.id_generator import IdGenerator

    from .store import ArtistSnapshot, InMemoryAvailabilityData


class InMemoryUnitOfWork(AbstractUnitOfWork):
    """Unit of work over shared in-memory data with per-artist locking."""

    def __init__(self, data: InMemoryAvailabilityData, id_generator: IdGenerator):
        self.data = data
        self.calendar = InMemoryCalendarStore(data)
        self.blocks = InMemoryBlockRegistry(data, id_generator)
        self.bookings = InMemoryBookingStore(data)
        self.committed = False
        self._held: dict[str, threading.RLock] = {}
        self._snapshots: dict[str, ArtistSnapshot] = {}

    def __enter__(self):
        self.committed = False
        return super().__enter__()

    def __exit__(self, *args):
        try:
            super().__exit__(*args)
        finally:
            for lock in self._held.values():
                lock.release()
            self._held.clear()
            self._snapshots.clear()

    def lock_artist(self, artist_id: str) -> None:
        if artist_id in self._held:
            return
        lock = self.data.locks.for_artist(artist_id)
        lock.acquire()
        self._held[artist_id] = lock
        self._snapshots[artist_id] = self.data.snapshot(artist_id)

    def commit(self):
        for artist_id in self._snapshots:
            self._snapshots[artist_id] = self.data.snapshot(artist_id)
        self.committed = True

    def rollback(self):
        for artist_id, snapshot in self._snapshots.items():
            self.data.restore(artist_id, snapshot)
