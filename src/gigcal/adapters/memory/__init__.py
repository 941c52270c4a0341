"""In-memory adapters.

All state lives in a shared ``InMemoryAvailabilityData`` and is lost when the
instance is discarded. Use for unit tests, prototyping, or embedding the core
in a single process where durability is not required.
"""

from .blocks import InMemoryBlockRegistry
from .bookings import InMemoryBookingStore
from .calendar import InMemoryCalendarStore
from .store import ArtistLocks, InMemoryAvailabilityData
from .unit_of_work import InMemoryUnitOfWork

__all__ = [
    "ArtistLocks",
    "InMemoryAvailabilityData",
    "InMemoryBlockRegistry",
    "InMemoryBookingStore",
    "InMemoryCalendarStore",
    "InMemoryUnitOfWork",
]
