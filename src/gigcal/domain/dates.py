"""Calendar date helpers shared by the domain and service layers."""

from __future__ import annotations

import datetime
from collections.abc import Iterator

from gigcal.domain.errors import InvalidDateRangeError, ValidationError

ONE_DAY = datetime.timedelta(days=1)


def daterange(start: datetime.date, end: datetime.date) -> Iterator[datetime.date]:
    """Yield every date from ``start`` to ``end`` inclusive."""
    for offset in range((end - start).days + 1):
        yield start + offset * ONE_DAY


def require_range(start: datetime.date, end: datetime.date) -> None:
    """Reject a range whose end precedes its start.

    Raises:
        InvalidDateRangeError: if ``end < start``.
    """
    if end < start:
        raise InvalidDateRangeError(start, end)


def to_date(value: datetime.date | datetime.datetime | str) -> datetime.date:
    """Coerce a date, datetime or ISO-8601 string into a calendar date.

    Aware datetimes are converted to UTC before the date is taken; naive
    datetimes are read as UTC.

    Raises:
        ValidationError: if the value cannot be read as a date.
    """
    if isinstance(value, datetime.datetime):
        if value.tzinfo is not None:
            value = value.astimezone(datetime.timezone.utc)
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        raw = value.strip()
        try:
            if len(raw) == 10:  # pylint: disable=magic-value-comparison
                return datetime.date.fromisoformat(raw)
            return to_date(datetime.datetime.fromisoformat(raw.replace("Z", "+00:00")))
        except ValueError as e:
            raise ValidationError(f"Malformed date: {value!r}") from e
    raise ValidationError(f"Malformed date: {value!r}")
