"""Handlers for explicit calendar entries and blackout blocks."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from gigcal.domain.value_objects import AvailabilityEntry, AvailabilityStatus
from gigcal.service_layer import commands

if TYPE_CHECKING:
    from gigcal.domain.value_objects import AvailabilityBlock
    from gigcal.service_layer.messagebus import UnitOfWorkFactory

logger = logging.getLogger(__name__)


def set_availability(
    cmd: commands.SetAvailability, uow_factory: UnitOfWorkFactory
) -> AvailabilityEntry:
    """Write an explicit status; the latest write for a date wins."""
    entry = AvailabilityEntry(
        artist_id=cmd.artist_id,
        date=cmd.date,
        status=AvailabilityStatus.parse(cmd.status),
        notes=cmd.notes,
    )
    with uow_factory() as uow:
        uow.lock_artist(cmd.artist_id)
        uow.calendar.set(entry)
        uow.commit()
    logger.info(
        "Artist %s marked %s on %s", cmd.artist_id, entry.status.value, cmd.date
    )
    return entry


def clear_availability(
    cmd: commands.ClearAvailability, uow_factory: UnitOfWorkFactory
) -> bool:
    """Drop the explicit entry; the date falls back to implicitly available."""
    with uow_factory() as uow:
        uow.lock_artist(cmd.artist_id)
        cleared = uow.calendar.clear(cmd.artist_id, cmd.date)
        uow.commit()
    if cleared:
        logger.info("Artist %s cleared entry on %s", cmd.artist_id, cmd.date)
    return cleared


def create_block(
    cmd: commands.CreateBlock, uow_factory: UnitOfWorkFactory
) -> AvailabilityBlock:
    """Store a new blackout block."""
    with uow_factory() as uow:
        uow.lock_artist(cmd.artist_id)
        block = uow.blocks.create(
            cmd.artist_id, cmd.start_date, cmd.end_date, cmd.reason, cmd.recurring
        )
        uow.commit()
    return block


def delete_block(cmd: commands.DeleteBlock, uow_factory: UnitOfWorkFactory) -> bool:
    """Delete one block; False when the artist has no such block."""
    with uow_factory() as uow:
        uow.lock_artist(cmd.artist_id)
        deleted = uow.blocks.delete(cmd.artist_id, cmd.block_id)
        uow.commit()
    return deleted


COMMAND_HANDLERS: dict[type, Callable[..., object]] = {
    commands.SetAvailability: set_availability,
    commands.ClearAvailability: clear_availability,
    commands.CreateBlock: create_block,
    commands.DeleteBlock: delete_block,
}
