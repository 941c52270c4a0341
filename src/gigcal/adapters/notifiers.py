"""Notifier and party directory adapters.

``DirectoryNotifier`` turns a status change into one message per recipient
and hands each to a sender callable (an email gateway, a queue producer, a
test list). A new booking request goes to the artist only; every later
transition goes to both the artist and the venue.
"""

from __future__ import annotations

import datetime
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass

from gigcal.domain.value_objects import Party
from gigcal.interfaces.notifier import (
    NotificationError,
    Notifier,
    PartyDirectory,
    StatusChangeNotice,
)

logger = logging.getLogger(__name__)

# pylint: disable=too-few-public-methods


@dataclass(frozen=True)
class NotificationMessage:  # pylint: disable=too-many-instance-attributes
    """Everything a template needs to tell one party about a booking."""

    recipient_email: str
    recipient_name: str
    other_party_name: str
    event_date: datetime.date
    venue_name: str
    venue_address: str | None
    booking_id: str
    status: str


Sender = Callable[[NotificationMessage], None]


class DirectoryNotifier(Notifier):
    """Fans a notice out to the parties involved through ``sender``.

    Parties without an email address are skipped with a warning.

    Args:
        sender: Delivers one message; any exception it raises is reported
            as NotificationError after the remaining recipients were tried.
    """

    def __init__(self, sender: Sender) -> None:
        self._sender = sender

    def booking_status_changed(self, notice: StatusChangeNotice) -> None:
        booking = notice.booking
        venue_name = booking.venue_name or notice.venue.name
        pairs = [(notice.artist, notice.venue)]
        if notice.previous_status is not None:
            pairs.append((notice.venue, notice.artist))

        failures: list[str] = []
        for recipient, other in pairs:
            if not recipient.email:
                logger.warning(
                    "No email for %s; booking %s notice not sent",
                    recipient.party_id,
                    booking.id,
                )
                continue
            message = NotificationMessage(
                recipient_email=recipient.email,
                recipient_name=recipient.name,
                other_party_name=other.name,
                event_date=booking.event_date,
                venue_name=venue_name,
                venue_address=booking.venue_address,
                booking_id=booking.id,
                status=notice.status.value,
            )
            try:
                self._sender(message)
            except Exception as e:  # pylint: disable=broad-except
                failures.append(f"{recipient.email}: {e}")
        if failures:
            raise NotificationError(
                f"Booking {booking.id} notice failed for " + "; ".join(failures)
            )


class LoggingNotifier(Notifier):
    """Writes each notice to the log; the default when nothing is wired in."""

    def booking_status_changed(self, notice: StatusChangeNotice) -> None:
        logger.info(
            "Booking %s for artist %s at venue %s: %s -> %s",
            notice.booking.id,
            notice.artist.party_id,
            notice.venue.party_id,
            notice.previous_status.value if notice.previous_status else "new",
            notice.status.value,
        )


class InMemoryNotifier(Notifier):
    """Keeps every notice in a list, in call order."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.notices: list[StatusChangeNotice] = []

    def booking_status_changed(self, notice: StatusChangeNotice) -> None:
        with self._lock:
            self.notices.append(notice)


class InMemoryPartyDirectory(PartyDirectory):
    """Party directory backed by dictionaries.

    Unknown ids resolve to a placeholder party named after the id.
    """

    def __init__(self) -> None:
        self._artists: dict[str, Party] = {}
        self._venues: dict[str, Party] = {}

    def add_artist(self, party: Party) -> None:
        self._artists[party.party_id] = party

    def add_venue(self, party: Party) -> None:
        self._venues[party.party_id] = party

    def artist(self, artist_id: str) -> Party:
        return self._artists.get(artist_id) or Party(artist_id, artist_id)

    def venue(self, venue_id: str) -> Party:
        return self._venues.get(venue_id) or Party(venue_id, venue_id)
