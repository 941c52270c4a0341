"""Interface for the registry of artist availability blocks.

Adapters implement storage only (``add``, ``remove``, ``list_blocks``). Block
creation, deletion, and the blocked-date queries are shared on the base class
so every backend expands recurring rules the same way.
"""

from __future__ import annotations

import abc
import datetime
import logging
from typing import TYPE_CHECKING

from gigcal.domain import recurrence
from gigcal.domain.dates import require_range
from gigcal.domain.value_objects import AvailabilityBlock

if TYPE_CHECKING:
    from gigcal.domain.value_objects import BlockedRange, Recurrence
    from gigcal.interfaces.id_generator import IdGenerator

logger = logging.getLogger(__name__)


class BlockRegistry(abc.ABC):
    """Owns the availability blocks of every artist.

    Args:
        id_generator: Source of block identifiers.
    """

    def __init__(self, id_generator: IdGenerator) -> None:
        self._id_generator = id_generator

    # --- storage contract ---

    @abc.abstractmethod
    def add(self, block: AvailabilityBlock) -> None:
        """Persist a block."""

    @abc.abstractmethod
    def remove(self, artist_id: str, block_id: str) -> bool:
        """Remove one of the artist's blocks.

        Returns:
            True if the block existed and was removed, False otherwise.
        """

    @abc.abstractmethod
    def list_blocks(self, artist_id: str) -> list[AvailabilityBlock]:
        """Return the artist's blocks in creation order."""

    # --- shared behaviour ---

    def create(  # pylint: disable=too-many-arguments
        self,
        artist_id: str,
        start_date: datetime.date,
        end_date: datetime.date,
        reason: str,
        recurring: Recurrence | None = None,
    ) -> AvailabilityBlock:
        """Create and store a new block with a fresh identifier.

        Raises:
            InvalidDateRangeError: if ``end_date < start_date``.
        """
        require_range(start_date, end_date)
        block = AvailabilityBlock(
            id=self._id_generator.new_id(),
            artist_id=artist_id,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            recurring=recurring,
            created_at=datetime.datetime.now(datetime.timezone.utc),
        )
        self.add(block)
        logger.info(
            "Block %s created for artist %s: %s - %s",
            block.id,
            artist_id,
            start_date,
            end_date,
        )
        return block

    def delete(self, artist_id: str, block_id: str) -> bool:
        """Delete one of the artist's blocks; False if it does not exist."""
        if removed := self.remove(artist_id, block_id):
            logger.info("Block %s deleted for artist %s", block_id, artist_id)
        return removed

    def is_blocked(self, artist_id: str, day: datetime.date) -> bool:
        """True if any of the artist's blocks covers ``day`` directly or by recurrence."""
        return recurrence.any_block_covers(self.list_blocks(artist_id), day)

    def get_blocked_ranges(
        self, artist_id: str, start: datetime.date, end: datetime.date
    ) -> list[BlockedRange]:
        """Blocked ranges for the artist within ``[start, end]``.

        Raises:
            InvalidDateRangeError: if ``end < start``.
        """
        require_range(start, end)
        ranges: list[BlockedRange] = []
        for block in self.list_blocks(artist_id):
            ranges.extend(recurrence.blocked_ranges(block, start, end))
        return ranges
