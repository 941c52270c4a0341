"""In-memory BlockRegistry implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gigcal.interfaces.block_registry import BlockRegistry

if TYPE_CHECKING:
    from gigcal.domain.value_objects import AvailabilityBlock
    from gigcal.interfaces.id_generator import IdGenerator

    from .store import InMemoryAvailabilityData


class InMemoryBlockRegistry(BlockRegistry):
    """In-memory implementation of the BlockRegistry interface."""

    def __init__(self, data: InMemoryAvailabilityData, id_generator: IdGenerator) -> None:
        super().__init__(id_generator)
        self._data = data

    def add(self, block: AvailabilityBlock) -> None:
        self._data.blocks.setdefault(block.artist_id, []).append(block)

    def remove(self, artist_id: str, block_id: str) -> bool:
        blocks = self._data.blocks.get(artist_id)
        if not blocks:
            return False
        for index, block in enumerate(blocks):
            if block.id == block_id:
                del blocks[index]
                return True
        return False

    def list_blocks(self, artist_id: str) -> list[AvailabilityBlock]:
        return list(self._data.blocks.get(artist_id, []))
