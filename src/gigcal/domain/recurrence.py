"""Blackout block matching and range expansion.

A block blocks every date of its literal ``[start_date, end_date]`` range.
A recurring block additionally blocks the dates its rule matches, from its
own ``start_date`` up to ``recurring.end_date`` (unbounded when unset):

- ``daily``: every date in the envelope.
- ``weekly``: weekdays listed in ``days_of_week`` (0 = Sunday), or the
  weekday of ``start_date`` when no list is given.
- ``monthly``: the day-of-month of ``start_date``. Months without that day
  (e.g. the 31st in February) have no match.

Range expansion walks the query window one day at a time and reports every
matching day as its own single-day range; adjacent matches are not merged.
"""

from __future__ import annotations

import datetime
from collections.abc import Iterable, Iterator

from gigcal.domain.dates import daterange
from gigcal.domain.value_objects import (
    AvailabilityBlock,
    BlockedRange,
    Recurrence,
    RecurrencePattern,
)


def sunday_based_weekday(day: datetime.date) -> int:
    """Weekday number with 0 = Sunday ... 6 = Saturday."""
    return day.isoweekday() % 7


def matches_recurrence(
    day: datetime.date, recurring: Recurrence, block_start: datetime.date
) -> bool:
    """Return True if ``day`` is matched by the recurrence rule of a block."""
    if recurring.end_date is not None and day > recurring.end_date:
        return False
    if day < block_start:
        return False

    match recurring.pattern:
        case RecurrencePattern.DAILY:
            return True
        case RecurrencePattern.WEEKLY:
            if recurring.days_of_week is not None:
                return sunday_based_weekday(day) in recurring.days_of_week
            return sunday_based_weekday(day) == sunday_based_weekday(block_start)
        case RecurrencePattern.MONTHLY:
            return day.day == block_start.day
        case _:  # pragma: no cover
            return False


def block_covers(block: AvailabilityBlock, day: datetime.date) -> bool:
    """Return True if ``day`` is inside the block's range or matches its rule."""
    if block.start_date <= day <= block.end_date:
        return True
    if block.recurring is not None:
        return matches_recurrence(day, block.recurring, block.start_date)
    return False


def any_block_covers(blocks: Iterable[AvailabilityBlock], day: datetime.date) -> bool:
    """Return True if any of ``blocks`` covers ``day``."""
    return any(block_covers(block, day) for block in blocks)


def blocked_ranges(
    block: AvailabilityBlock, start: datetime.date, end: datetime.date
) -> Iterator[BlockedRange]:
    """Yield the blocked ranges a single block contributes to a window.

    The literal range is clipped to ``[start, end]``; a recurring block then
    contributes one single-day range per matching day in the window.
    """
    if block.end_date >= start and block.start_date <= end:
        yield BlockedRange(
            start=max(block.start_date, start),
            end=min(block.end_date, end),
            reason=block.reason,
        )

    if block.recurring is None:
        return

    for day in daterange(start, end):
        if matches_recurrence(day, block.recurring, block.start_date):
            yield BlockedRange(start=day, end=day, reason=block.reason)
