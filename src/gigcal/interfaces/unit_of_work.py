"""Unit of Work interface for GIGCAL.

Defines the AbstractUnitOfWork contract: a context-managed unit of work
exposing the calendar, block registry and booking store, with per-artist
serialization and abstract commit/rollback methods.
"""

from __future__ import annotations

import abc

from .block_registry import BlockRegistry
from .booking_store import BookingStore
from .calendar_store import CalendarStore


class AbstractUnitOfWork(abc.ABC):
    """Contract for a transactional unit of work.

    Mutating handlers call ``lock_artist`` before reading the state they are
    about to act on. The lock is held until the unit of work exits, so a
    check-then-act sequence for one artist cannot interleave with another
    for the same artist.
    """

    calendar: CalendarStore
    blocks: BlockRegistry
    bookings: BookingStore

    def __enter__(self) -> AbstractUnitOfWork:
        """Enter the unit of work context and return the unit.

        Implementations may acquire transactional resources here.
        """
        return self

    def __exit__(self, *args):
        """Exit the unit of work context.

        Default behavior is to roll back on exit.
        """
        self.rollback()

    @abc.abstractmethod
    def lock_artist(self, artist_id: str) -> None:
        """Serialize the rest of this unit of work against others for the artist.

        Re-locking an artist already held by this unit of work is a no-op.
        """

    @abc.abstractmethod
    def commit(self):
        """Persist changes and finalize the transaction."""

    @abc.abstractmethod
    def rollback(self):
        """Revert changes and clean up transactional resources."""
