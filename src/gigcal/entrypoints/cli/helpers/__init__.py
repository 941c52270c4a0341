"""CLI helpers for GIGCAL.

URL redaction for display, OSC-8 hyperlinks, stderr status lines with
emoji fallbacks, option parsers, and mapping of domain errors to click
errors.
"""

from .db_url import sanitize_url
from .errors import domain_errors_as_click
from .hyperlinks import hyperlink
from .messages import error, success, warn
from .parsers import parse_date, parse_weekdays

__all__ = [
    "domain_errors_as_click",
    "error",
    "hyperlink",
    "parse_date",
    "parse_weekdays",
    "sanitize_url",
    "success",
    "warn",
]
