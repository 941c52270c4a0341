"""iCalendar (RFC 5545) export of availability blocks.

Each stored block becomes one VEVENT with its literal start and end; no
RRULE is emitted for recurring blocks. Dates are written as UTC midnight
timestamps in basic format. Lines end in CRLF, text values are escaped, and
lines longer than 75 octets are folded.
"""

from __future__ import annotations

import datetime
from collections.abc import Iterable

from gigcal.domain.value_objects import AvailabilityBlock

CRLF = "\r\n"
MAX_LINE_OCTETS = 75


def escape_text(value: str) -> str:
    """Escape a TEXT property value."""
    return (
        value.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\r\n", "\\n")
        .replace("\n", "\\n")
        .replace("\r", "\\n")
    )


def fold_line(line: str) -> str:
    """Fold a content line into chunks of at most 75 octets.

    Continuation lines start with a single space. Multi-byte characters are
    never split.
    """
    if len(line.encode("utf-8")) <= MAX_LINE_OCTETS:
        return line
    chunks: list[str] = []
    current = ""
    size = 0
    for char in line:
        width = len(char.encode("utf-8"))
        # continuation lines lose one octet to the leading space
        limit = MAX_LINE_OCTETS if not chunks else MAX_LINE_OCTETS - 1
        if size + width > limit:
            chunks.append(current)
            current, size = "", 0
        current += char
        size += width
    chunks.append(current)
    return (CRLF + " ").join(chunks)


def format_date(day: datetime.date) -> str:
    """A calendar date as a UTC midnight timestamp, e.g. ``20260301T000000Z``."""
    return f"{day:%Y%m%d}T000000Z"


def format_timestamp(moment: datetime.datetime) -> str:
    """An instant in UTC basic format, e.g. ``20260115T093000Z``."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(datetime.timezone.utc)
    return f"{moment:%Y%m%dT%H%M%S}Z"


def render_blocks(
    blocks: Iterable[AvailabilityBlock],
    *,
    product: str,
    domain: str,
    now: datetime.datetime,
) -> str:
    """Render blocks as a VCALENDAR document.

    Args:
        blocks: Blocks to export, one VEVENT each, in the given order.
        product: Product name for the PRODID line.
        domain: Domain suffix of every VEVENT UID.
        now: DTSTAMP for every event.
    """
    dtstamp = format_timestamp(now)
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:-//{product}//Artist Availability Blocks//EN",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
    ]
    for block in blocks:
        reason = escape_text(block.reason)
        lines.extend(
            [
                "BEGIN:VEVENT",
                f"UID:block-{block.id}@{domain}",
                f"DTSTAMP:{dtstamp}",
                f"DTSTART:{format_date(block.start_date)}",
                f"DTEND:{format_date(block.end_date)}",
                f"SUMMARY:Unavailable - {reason}",
                f"DESCRIPTION:{reason}",
                "STATUS:CONFIRMED",
                "END:VEVENT",
            ]
        )
    lines.append("END:VCALENDAR")
    return CRLF.join(fold_line(line) for line in lines) + CRLF
