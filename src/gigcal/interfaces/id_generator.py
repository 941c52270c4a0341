"""Port for identifier sources."""

import abc

# pylint: disable=too-few-public-methods


class IdGenerator(abc.ABC):
    """Source of block and booking identifiers.

    Implementations must be safe to call from several threads and must never
    repeat an identifier within a process. Identifiers fit the 64-character id
    columns.
    """

    @abc.abstractmethod
    def new_id(self) -> str:
        """Return an identifier not handed out before."""
