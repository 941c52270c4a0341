"""Status lines for the GIGCAL CLI.

Lines go to stderr so stdout stays clean for exported calendars and other
machine-readable output. Emoji markers fall back to ASCII when stderr cannot
encode them.
"""

import click

GLYPHS = {
    "warn": ("⚠️", "[!]"),
    "success": ("✅", "[OK]"),
    "error": ("❌", "[X]"),
}


def _can_encode(character: str) -> bool:
    stream = click.get_text_stream("stderr")  # pragma: no mutate
    encoding = getattr(stream, "encoding", None) or "ascii"
    try:
        character.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def glyph(kind: str) -> str:
    """Marker for ``kind`` (warn, success, error) that the terminal can show."""
    emoji, fallback = GLYPHS[kind]
    return emoji if _can_encode(emoji) else fallback


def warn(msg: str) -> None:
    """Yellow warning line, e.g. ``⚠️  This will modify your database.``"""
    click.secho(f"{glyph('warn')}  {msg}", fg="yellow", bold=True, err=True)


def success(msg: str) -> None:
    """Green success line, e.g. ``✅  Block created.``"""
    click.secho(f"{glyph('success')}  {msg}", fg="green", bold=True, err=True)


def error(msg: str) -> None:
    """Red error line, e.g. ``❌  Cannot connect to database.``"""
    click.secho(f"{glyph('error')}  {msg}", fg="red", bold=True, err=True)
