"""Ports for the notification collaborator.

The core calls ``Notifier.booking_status_changed`` once for every status
change (booking creation included). Delivery is the collaborator's concern.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gigcal.domain.booking import Booking
    from gigcal.domain.value_objects import BookingStatus, Party

# pylint: disable=too-few-public-methods


class NotificationError(Exception):
    """Raised by notifiers when a notice could not be handed off."""


@dataclass(frozen=True)
class StatusChangeNotice:
    """What changed on a booking and who is involved.

    Attributes:
        booking: The booking after the change.
        previous_status: Status before the change; ``None`` for a new request.
        artist: The artist party, as resolved by the directory.
        venue: The venue party, as resolved by the directory.
    """

    booking: Booking
    previous_status: BookingStatus | None
    artist: Party
    venue: Party

    @property
    def status(self) -> BookingStatus:
        """Status after the change."""
        return self.booking.status


class Notifier(abc.ABC):
    """Contract for the notification collaborator."""

    @abc.abstractmethod
    def booking_status_changed(self, notice: StatusChangeNotice) -> None:
        """Handle one booking status change.

        Raises:
            NotificationError: if the notice could not be handed off.
        """


class PartyDirectory(abc.ABC):
    """Resolves artist and venue ids to display identities."""

    @abc.abstractmethod
    def artist(self, artist_id: str) -> Party:
        """Return the artist identity (a bare placeholder when unknown)."""

    @abc.abstractmethod
    def venue(self, venue_id: str) -> Party:
        """Return the venue identity (a bare placeholder when unknown)."""
