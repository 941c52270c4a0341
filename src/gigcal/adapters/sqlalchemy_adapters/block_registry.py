"""Implementation of BlockRegistry using SQLAlchemy."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import delete, insert, select

from gigcal.adapters.db.schema import availability_blocks
from gigcal.domain.value_objects import AvailabilityBlock, Recurrence
from gigcal.interfaces.block_registry import BlockRegistry

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Row

    from gigcal.interfaces.id_generator import IdGenerator


def _to_block(row: Row) -> AvailabilityBlock:
    recurring = None
    if row.recurrence_pattern is not None:
        recurring = Recurrence(
            pattern=row.recurrence_pattern,
            end_date=row.recurrence_end_date,
            days_of_week=row.recurrence_days,
        )
    return AvailabilityBlock(
        id=row.block_id,
        artist_id=row.artist_id,
        start_date=row.start_date,
        end_date=row.end_date,
        reason=row.reason,
        created_at=row.created_at,
        recurring=recurring,
    )


class SqlAlchemyBlockRegistry(BlockRegistry):
    """BlockRegistry backed by the ``availability_blocks`` table.

    Creation order is the table's identity column, not the block id.
    """

    def __init__(self, connection: Connection, id_generator: IdGenerator):
        super().__init__(id_generator)
        self.connection = connection

    def add(self, block: AvailabilityBlock) -> None:
        recurring = block.recurring
        self.connection.execute(
            insert(availability_blocks).values(
                block_id=block.id,
                artist_id=block.artist_id,
                start_date=block.start_date,
                end_date=block.end_date,
                reason=block.reason,
                recurrence_pattern=recurring.pattern.value if recurring else None,
                recurrence_end_date=recurring.end_date if recurring else None,
                recurrence_days=recurring.days_of_week if recurring else None,
                created_at=block.created_at,
            )
        )

    def remove(self, artist_id: str, block_id: str) -> bool:
        result = self.connection.execute(
            delete(availability_blocks).where(
                availability_blocks.c.artist_id == artist_id,
                availability_blocks.c.block_id == block_id,
            )
        )
        return result.rowcount == 1

    def list_blocks(self, artist_id: str) -> list[AvailabilityBlock]:
        stmt = (
            select(availability_blocks)
            .where(availability_blocks.c.artist_id == artist_id)
            .order_by(availability_blocks.c.seq)
        )
        return [_to_block(row) for row in self.connection.execute(stmt)]
