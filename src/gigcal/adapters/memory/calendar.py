"""In-memory CalendarStore implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gigcal.interfaces.calendar_store import CalendarStore

if TYPE_CHECKING:
    import datetime

    from gigcal.domain.value_objects import AvailabilityEntry

    from .store import InMemoryAvailabilityData


class InMemoryCalendarStore(CalendarStore):
    """In-memory implementation of the CalendarStore interface."""

    def __init__(self, data: InMemoryAvailabilityData) -> None:
        self._data = data

    def get(self, artist_id: str, day: datetime.date) -> AvailabilityEntry | None:
        return self._data.entries.get(artist_id, {}).get(day)

    def set(self, entry: AvailabilityEntry) -> None:
        self._data.entries.setdefault(entry.artist_id, {})[entry.date] = entry

    def query_range(
        self, artist_id: str, start: datetime.date, end: datetime.date
    ) -> list[AvailabilityEntry]:
        entries = self._data.entries.get(artist_id, {})
        return [entries[day] for day in sorted(entries) if start <= day <= end]

    def clear(self, artist_id: str, day: datetime.date) -> bool:
        return self._data.entries.get(artist_id, {}).pop(day, None) is not None
