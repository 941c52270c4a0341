"""OSC-8 terminal hyperlinks with a plain-text fallback."""

import os
import sys
from typing import TextIO

OSC8_TERMINALS = {"apple_terminal", "vscode", "iterm.app", "wezterm", "kitty"}


def supports_osc8(stream: TextIO | None = None) -> bool:
    """Best-effort guess whether ``stream`` (stdout by default) renders OSC-8 links.

    Streams that are not a TTY never do. Otherwise the terminal is matched
    against a short allowlist via ``TERM_PROGRAM``, ``WT_SESSION``,
    ``VTE_VERSION`` and ``TERM``.
    """
    stream = stream or sys.stdout
    if not getattr(stream, "isatty", lambda: False)():
        return False
    program = (os.getenv("TERM_PROGRAM") or "").lower()
    return bool(
        program in OSC8_TERMINALS
        or os.getenv("WT_SESSION")
        or os.getenv("VTE_VERSION")
        or os.getenv("TERM", "").startswith(("alacritty", "konsole"))
    )


def hyperlink(url: str, label: str | None = None) -> str:
    """``url`` as a clickable link when supported, else ``label`` or the URL itself."""
    text = label or url
    if not supports_osc8():
        return text
    return f"\x1b]8;;{url}\x07{text}\x1b]8;;\x07"
