"""Import of third-party calendar events as blackout blocks.

An event becomes a block when its ``type`` is ``"blocked"`` or its ``title``
contains ``"Unavailable"``. Every other event is skipped. Each event is
stored in its own unit of work, so one malformed event cannot abort the
rest of the batch.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from gigcal.domain.dates import to_date
from gigcal.domain.errors import DomainError
from gigcal.service_layer import commands

if TYPE_CHECKING:
    from gigcal.domain.value_objects import AvailabilityBlock
    from gigcal.service_layer.messagebus import UnitOfWorkFactory

logger = logging.getLogger(__name__)

DEFAULT_REASON = "Calendar block"
BLOCKING_TYPE = "blocked"
BLOCKING_TITLE_MARKER = "Unavailable"


@dataclass(frozen=True)
class ImportFailure:
    """An event that could not be turned into a block."""

    index: int
    event: Any
    error: str


@dataclass
class ImportReport:
    """Outcome of one import batch, in event order."""

    created: list[AvailabilityBlock] = field(default_factory=list)
    skipped: list[int] = field(default_factory=list)
    failed: list[ImportFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True if no event failed."""
        return not self.failed


def is_blocking_event(event: Mapping[str, Any]) -> bool:
    """True if a calendar event marks the artist as unavailable."""
    title = event.get("title")
    return event.get("type") == BLOCKING_TYPE or (
        isinstance(title, str) and BLOCKING_TITLE_MARKER in title
    )


def import_calendar_events(
    cmd: commands.ImportCalendarEvents, uow_factory: UnitOfWorkFactory
) -> ImportReport:
    """Create a non-recurring block for every blocking event."""
    report = ImportReport()
    for index, event in enumerate(cmd.events):
        if not isinstance(event, Mapping):
            logger.warning(
                "Skipping calendar event %d for artist %s: not a mapping",
                index,
                cmd.artist_id,
            )
            report.failed.append(
                ImportFailure(index=index, event=event, error="Event is not a mapping")
            )
            continue
        if not is_blocking_event(event):
            report.skipped.append(index)
            continue
        try:
            start = to_date(event["start"])
            end = to_date(event["end"])
            reason = str(event.get("description") or DEFAULT_REASON)
            with uow_factory() as uow:
                uow.lock_artist(cmd.artist_id)
                block = uow.blocks.create(cmd.artist_id, start, end, reason)
                uow.commit()
        except (DomainError, KeyError, TypeError, AttributeError) as e:
            logger.warning(
                "Skipping calendar event %d for artist %s: %s", index, cmd.artist_id, e
            )
            report.failed.append(ImportFailure(index=index, event=event, error=str(e)))
            continue
        report.created.append(block)

    logger.info(
        "Calendar import for artist %s: %d created, %d skipped, %d failed",
        cmd.artist_id,
        len(report.created),
        len(report.skipped),
        len(report.failed),
    )
    return report


COMMAND_HANDLERS: dict[type, Callable[..., object]] = {
    commands.ImportCalendarEvents: import_calendar_events,
}
