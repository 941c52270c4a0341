"""Unit tests for the iCalendar export."""

from __future__ import annotations

import datetime

import pytest
from hypothesis import given
from hypothesis import strategies as st

from gigcal.service_layer.ical import (
    CRLF,
    MAX_LINE_OCTETS,
    escape_text,
    fold_line,
    format_date,
    format_timestamp,
    render_blocks,
)
from tests.fixtures.datagen import d

NOW = datetime.datetime(2026, 1, 15, 9, 30, tzinfo=datetime.timezone.utc)


def unfold(text: str) -> list[str]:
    """Content lines with folding undone."""
    return text.replace(CRLF + " ", "").split(CRLF)


@pytest.mark.parametrize(
    "raw, escaped",
    [
        ("Tour", "Tour"),
        ("Rome, Milan; Turin", "Rome\\, Milan\\; Turin"),
        ("back\\slash", "back\\\\slash"),
        ("two\nlines", "two\\nlines"),
        ("crlf\r\nline", "crlf\\nline"),
    ],
)
def test_escape_text(raw, escaped):
    assert escape_text(raw) == escaped


def test_short_lines_are_not_folded():
    line = "SUMMARY:" + "x" * (MAX_LINE_OCTETS - len("SUMMARY:"))
    assert fold_line(line) == line


def test_long_lines_fold_at_75_octets():
    line = "DESCRIPTION:" + "a" * 200
    folded = fold_line(line)
    physical = folded.split(CRLF)
    assert len(physical) > 1
    assert all(len(p.encode("utf-8")) <= MAX_LINE_OCTETS for p in physical)
    assert all(p.startswith(" ") for p in physical[1:])
    assert folded.replace(CRLF + " ", "") == line


@given(st.text(alphabet=st.characters(blacklist_categories=("Cs", "Cc")), max_size=300))
def test_folding_never_splits_characters(value):
    line = "DESCRIPTION:" + value
    folded = fold_line(line)
    for physical in folded.split(CRLF):
        assert len(physical.encode("utf-8")) <= MAX_LINE_OCTETS
    assert folded.replace(CRLF + " ", "") == line


def test_date_and_timestamp_formats():
    assert format_date(d("2026-03-01")) == "20260301T000000Z"
    assert format_timestamp(NOW) == "20260115T093000Z"
    plus_two = datetime.timezone(datetime.timedelta(hours=2))
    assert format_timestamp(NOW.astimezone(plus_two)) == "20260115T093000Z"


def test_empty_calendar():
    text = render_blocks([], product="Gigcal", domain="gigcal.test", now=NOW)
    assert text.endswith(CRLF)
    assert unfold(text)[:-1] == [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "PRODID:-//Gigcal//Artist Availability Blocks//EN",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
        "END:VCALENDAR",
    ]


def test_one_event_per_block(make_block):
    tour = make_block(id="b1", reason="Tour, Europe")
    weekly = make_block(
        id="b2",
        start_date=d("2026-01-03"),
        end_date=d("2026-01-03"),
        reason="Weekends",
        recurring={"pattern": "weekly", "days_of_week": (0, 6)},
    )
    lines = unfold(render_blocks([tour, weekly], product="Gigcal", domain="gigcal.test", now=NOW))

    assert lines.count("BEGIN:VEVENT") == 2
    start = lines.index("BEGIN:VEVENT")
    assert lines[start : start + 9] == [
        "BEGIN:VEVENT",
        "UID:block-b1@gigcal.test",
        "DTSTAMP:20260115T093000Z",
        "DTSTART:20260301T000000Z",
        "DTEND:20260305T000000Z",
        "SUMMARY:Unavailable - Tour\\, Europe",
        "DESCRIPTION:Tour\\, Europe",
        "STATUS:CONFIRMED",
        "END:VEVENT",
    ]
    assert "UID:block-b2@gigcal.test" in lines
    assert not any(line.startswith("RRULE") for line in lines)


def test_every_line_ends_in_crlf(make_block):
    text = render_blocks([make_block(reason="r" * 120)], product="P", domain="x", now=NOW)
    assert "\n" not in text.replace(CRLF, "")
