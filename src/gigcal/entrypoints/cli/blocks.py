"""``gigcal blocks``: manage an artist's blackout blocks.

Dates are ISO-8601 (``2026-03-01``). Block ids and exported calendars go to
stdout; status lines go to stderr.
"""

from __future__ import annotations

import datetime
import json
from pathlib import Path

import click
import click_extra as clickx
from rich.console import Console
from rich.table import Table

from gigcal.domain.value_objects import Recurrence, RecurrencePattern

from .context import get_api
from .helpers import domain_errors_as_click, parse_date, parse_weekdays, success, warn


def _describe_recurrence(recurring: Recurrence | None) -> str:
    if recurring is None:
        return ""
    text = recurring.pattern.value
    if recurring.days_of_week is not None:
        text += " on " + ",".join(str(d) for d in recurring.days_of_week)
    if recurring.end_date is not None:
        text += f" until {recurring.end_date}"
    return text


def _json_default(value: object) -> str:
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    raise TypeError(f"Cannot serialize {type(value).__name__}")


@click.group(cls=clickx.ExtraGroup)
def blocks() -> None:
    """Create, list, delete, import and export availability blocks."""


@blocks.command(name="list")
@click.argument("artist_id")
@click.option("--json", "as_json", is_flag=True, help="Print blocks as JSON.")
@click.pass_context
@domain_errors_as_click
def list_(ctx: click.Context, artist_id: str, as_json: bool) -> None:
    """List ARTIST_ID's blocks in creation order."""
    found = get_api(ctx).list_blocks(artist_id)
    if as_json:
        rows = [
            {
                "id": b.id,
                "start_date": b.start_date,
                "end_date": b.end_date,
                "reason": b.reason,
                "recurring": _describe_recurrence(b.recurring) or None,
                "created_at": b.created_at,
            }
            for b in found
        ]
        click.echo(json.dumps(rows, default=_json_default, indent=2))
        return

    table = Table("ID", "Start", "End", "Reason", "Recurs")
    for b in found:
        table.add_row(
            b.id,
            b.start_date.isoformat(),
            b.end_date.isoformat(),
            b.reason,
            _describe_recurrence(b.recurring),
        )
    Console(color_system="auto" if ctx.color is not False else None).print(table)


@blocks.command()
@click.argument("artist_id")
@click.argument("start", callback=parse_date)
@click.argument("end", callback=parse_date)
@click.option("--reason", "-r", required=True, help="Why the artist is unavailable.")
@click.option(
    "--repeat",
    type=click.Choice([p.value for p in RecurrencePattern], case_sensitive=False),
    help="Repeat the block from START onwards.",
)
@click.option(
    "--until",
    callback=parse_date,
    help="Last date a repeating block can match.",
)
@click.option(
    "--days",
    callback=parse_weekdays,
    help="Weekdays for --repeat weekly, e.g. 'sat,sun' or '0,6' (0 = Sunday).",
)
@click.pass_context
@domain_errors_as_click
def create(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    artist_id: str,
    start: datetime.date,
    end: datetime.date,
    reason: str,
    repeat: str | None,
    until: datetime.date | None,
    days: tuple[int, ...] | None,
) -> None:
    """Block ARTIST_ID from START to END (inclusive) and print the new block id."""
    if repeat is None and (until is not None or days is not None):
        raise click.UsageError("--until and --days need --repeat.")
    recurring = (
        Recurrence(pattern=repeat, end_date=until, days_of_week=days)
        if repeat
        else None
    )
    block_id = get_api(ctx).create_block(artist_id, start, end, reason, recurring)
    click.echo(block_id)
    success(f"Block created for artist {artist_id}.")


@blocks.command()
@click.argument("artist_id")
@click.argument("block_id")
@click.pass_context
@domain_errors_as_click
def delete(ctx: click.Context, artist_id: str, block_id: str) -> None:
    """Delete block BLOCK_ID of ARTIST_ID."""
    if not get_api(ctx).delete_block(artist_id, block_id):
        raise click.ClickException(f"Artist {artist_id} has no block {block_id}.")
    success(f"Block {block_id} deleted.")


@blocks.command()
@click.argument("artist_id")
@click.argument("start", callback=parse_date)
@click.argument("end", callback=parse_date)
@click.pass_context
@domain_errors_as_click
def ranges(
    ctx: click.Context, artist_id: str, start: datetime.date, end: datetime.date
) -> None:
    """Print the blocked ranges of ARTIST_ID between START and END."""
    for blocked in get_api(ctx).get_blocked_ranges(artist_id, start, end):
        click.echo(f"{blocked.start}\t{blocked.end}\t{blocked.reason}")


@blocks.command()
@click.argument("artist_id")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Write the calendar to a file instead of stdout.",
)
@click.pass_context
@domain_errors_as_click
def export(ctx: click.Context, artist_id: str, output: Path | None) -> None:
    """Export ARTIST_ID's blocks as an iCalendar document."""
    document = get_api(ctx).export_blocks_as_ical(artist_id)
    if output is None:
        click.echo(document, nl=False)
        return
    with output.open("w", encoding="utf-8", newline="") as fh:
        fh.write(document)
    success(f"Calendar written to {output}.")


@blocks.command(name="import")
@click.argument("artist_id")
@click.argument("events_file", type=click.File("r", encoding="utf-8"))
@click.pass_context
@domain_errors_as_click
def import_(ctx: click.Context, artist_id: str, events_file) -> None:
    """Import blocking events for ARTIST_ID from a JSON list (``-`` for stdin).

    Each event is an object with ``type``, ``title``, ``description``,
    ``start`` and ``end``. Exits with status 1 if any event failed.
    """
    try:
        events = json.load(events_file)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"Not valid JSON: {e}", param_hint="EVENTS_FILE") from e
    if not isinstance(events, list) or not all(isinstance(e, dict) for e in events):
        raise click.BadParameter(
            "Expected a JSON list of event objects.", param_hint="EVENTS_FILE"
        )

    report = get_api(ctx).import_calendar_events(artist_id, events)
    for block in report.created:
        click.echo(block.id)
    for failure in report.failed:
        warn(f"Event {failure.index} not imported: {failure.error}")
    summary = (
        f"{len(report.created)} created, {len(report.skipped)} skipped, "
        f"{len(report.failed)} failed."
    )
    if not report.ok:
        warn(summary)
        ctx.exit(1)
    success(summary)
