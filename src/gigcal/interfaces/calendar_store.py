"""Interface for the per-artist, per-date availability calendar."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import datetime

    from gigcal.domain.value_objects import AvailabilityEntry


class CalendarStore(abc.ABC):
    """Explicit availability entries keyed by ``(artist_id, date)``.

    The store performs no business validation; callers enforce the rules.
    """

    @abc.abstractmethod
    def get(self, artist_id: str, day: datetime.date) -> AvailabilityEntry | None:
        """Return the entry for an artist on a date, or ``None`` if none is stored."""

    @abc.abstractmethod
    def set(self, entry: AvailabilityEntry) -> None:
        """Upsert an entry; a later write replaces the earlier one for the same key."""

    @abc.abstractmethod
    def query_range(
        self, artist_id: str, start: datetime.date, end: datetime.date
    ) -> list[AvailabilityEntry]:
        """Return the artist's entries with ``start <= date <= end``, ordered by date."""

    @abc.abstractmethod
    def clear(self, artist_id: str, day: datetime.date) -> bool:
        """Remove the entry for an artist on a date.

        Returns:
            True if an entry was removed, False if none existed.
        """
