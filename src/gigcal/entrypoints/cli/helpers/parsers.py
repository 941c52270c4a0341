"""Click callbacks and types for dates and weekday lists."""

from __future__ import annotations

import datetime

import click

from gigcal.domain.dates import to_date
from gigcal.domain.errors import ValidationError

WEEKDAY_NAMES = ("sun", "mon", "tue", "wed", "thu", "fri", "sat")


def parse_date(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: str | None,
) -> datetime.date | None:
    """Read an ISO-8601 date option or argument."""
    if value is None:
        return None
    try:
        return to_date(value)
    except ValidationError as e:
        raise click.BadParameter(str(e)) from e


def parse_weekdays(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: str | None,
) -> tuple[int, ...] | None:
    """Read ``0,6`` or ``sun,sat`` into weekday numbers (0 = Sunday)."""
    if not value:
        return None
    days: list[int] = []
    for item in value.split(","):
        token = item.strip().lower()
        if token in WEEKDAY_NAMES:
            days.append(WEEKDAY_NAMES.index(token))
        elif token.isdigit() and 0 <= int(token) <= 6:
            days.append(int(token))
        else:
            raise click.BadParameter(
                f"Unknown weekday {item!r}; use 0-6 (0 = Sunday) or sun..sat"
            )
    return tuple(days)
