"""GIGCAL

Availability and booking admission core for an artist/venue marketplace.
It tracks per-artist calendar state, expands recurring blackout rules and
decides whether a booking may be admitted for a date range.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
