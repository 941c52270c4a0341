"""``gigcal bookings``: admission checks and booking inspection."""

from __future__ import annotations

import datetime

import click
import click_extra as clickx

from gigcal.domain.dates import daterange

from .context import get_api
from .helpers import domain_errors_as_click, parse_date, success, warn


@click.group(cls=clickx.ExtraGroup)
def bookings() -> None:
    """Check whether artists can be booked and inspect their bookings."""


@bookings.command()
@click.argument("artist_id")
@click.argument("start", callback=parse_date)
@click.argument("end", required=False, callback=parse_date)
@click.pass_context
@domain_errors_as_click
def check(
    ctx: click.Context,
    artist_id: str,
    start: datetime.date,
    end: datetime.date | None,
) -> None:
    """Check whether ARTIST_ID can be booked from START to END (default START).

    Exits with status 1 when a date in the range is blocked.
    """
    end = end or start
    api = get_api(ctx)
    if api.can_book_artist(artist_id, start, end):
        success(f"Artist {artist_id} is available {start} - {end}.")
        return
    blocked = [
        day for day in daterange(start, end) if api.is_date_blocked(artist_id, day)
    ]
    for day in blocked:
        click.echo(day.isoformat())
    warn(f"Artist {artist_id} is unavailable on {len(blocked)} date(s).")
    ctx.exit(1)


@bookings.command(name="list")
@click.argument("artist_id")
@click.pass_context
@domain_errors_as_click
def list_(ctx: click.Context, artist_id: str) -> None:
    """List ARTIST_ID's bookings by event date."""
    for booking in get_api(ctx).list_bookings_for_artist(artist_id):
        click.echo(
            f"{booking.id}\t{booking.event_date}\t{booking.last_date}\t"
            f"{booking.status.value}\t{booking.venue_id}"
        )


@bookings.command()
@click.argument("artist_id")
@click.pass_context
@domain_errors_as_click
def reconcile(ctx: click.Context, artist_id: str) -> None:
    """Report dates where ARTIST_ID's calendar and confirmed bookings disagree.

    Exits with status 1 when drift is found.
    """
    drift = get_api(ctx).reconcile_calendar(artist_id)
    for item in drift:
        click.echo(f"{item.date}\t{item.kind.value}\t{item.booking_id or '-'}")
    if drift:
        warn(f"{len(drift)} calendar drift(s) found for artist {artist_id}.")
        ctx.exit(1)
    success(f"Calendar of artist {artist_id} matches its bookings.")
