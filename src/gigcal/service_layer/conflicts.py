"""Admission checks for booking requests.

A date is blocked for an artist when it holds an explicit entry other than
``available`` or when any of the artist's blocks covers it, directly or by
recurrence. Dates without an entry are implicitly available.
"""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING

from gigcal.domain import recurrence
from gigcal.domain.dates import daterange, require_range
from gigcal.domain.value_objects import AvailabilityStatus

if TYPE_CHECKING:
    from gigcal.domain.value_objects import AvailabilityBlock, AvailabilityEntry
    from gigcal.interfaces.block_registry import BlockRegistry
    from gigcal.interfaces.calendar_store import CalendarStore


def _blocks_booking(entry: AvailabilityEntry | None) -> bool:
    return entry is not None and entry.status is not AvailabilityStatus.AVAILABLE


class ConflictResolver:
    """Decides whether an artist can take a booking on a date or date range.

    Args:
        calendar: Explicit per-date entries.
        blocks: The artist blackout blocks.
    """

    def __init__(self, calendar: CalendarStore, blocks: BlockRegistry) -> None:
        self.calendar = calendar
        self.blocks = blocks

    def is_date_blocked(self, artist_id: str, day: datetime.date) -> bool:
        """True if the artist cannot be booked on ``day``."""
        if _blocks_booking(self.calendar.get(artist_id, day)):
            return True
        return self.blocks.is_blocked(artist_id, day)

    def first_conflict(
        self, artist_id: str, start: datetime.date, end: datetime.date
    ) -> datetime.date | None:
        """Earliest blocked date in ``[start, end]``, or None if every date is free.

        Raises:
            InvalidDateRangeError: if ``end < start``.
        """
        require_range(start, end)
        entries = {e.date: e for e in self.calendar.query_range(artist_id, start, end)}
        blocks = self.blocks.list_blocks(artist_id)
        for day in daterange(start, end):
            if _blocks_booking(entries.get(day)) or recurrence.any_block_covers(
                blocks, day
            ):
                return day
        return None

    def can_book_artist(
        self, artist_id: str, start: datetime.date, end: datetime.date
    ) -> bool:
        """True if no date in ``[start, end]`` is blocked.

        Raises:
            InvalidDateRangeError: if ``end < start``.
        """
        return self.first_conflict(artist_id, start, end) is None

    def describe(self, artist_id: str, day: datetime.date) -> str:
        """Human-readable reason ``day`` is blocked, for error messages."""
        entry = self.calendar.get(artist_id, day)
        if entry is not None and _blocks_booking(entry):
            return f"date is marked {entry.status.value}"
        covering: list[AvailabilityBlock] = [
            block
            for block in self.blocks.list_blocks(artist_id)
            if recurrence.block_covers(block, day)
        ]
        if covering:
            return f"blocked ({covering[0].reason})"
        return "date is not available"
