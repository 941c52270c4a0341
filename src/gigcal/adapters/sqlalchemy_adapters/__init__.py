"""SQLAlchemy adapters for the availability core.

Each adapter works on a Connection owned by ``SqlAlchemyUnitOfWork``; none of
them commits. PostgreSQL and SQLite are supported.
"""

from .block_registry import SqlAlchemyBlockRegistry
from .booking_store import SqlAlchemyBookingStore
from .calendar_store import SqlAlchemyCalendarStore

__all__ = [
    "SqlAlchemyBlockRegistry",
    "SqlAlchemyBookingStore",
    "SqlAlchemyCalendarStore",
]
