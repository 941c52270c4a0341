"""ID generators for GIGCAL."""

import threading

from ulid import monotonic

from gigcal.interfaces.id_generator import IdGenerator

# pylint: disable=too-few-public-methods


class ULIDGenerator(IdGenerator):
    """Thread-safe monotonic ULID generator.

    ULIDs are unique, lexicographically sortable identifiers.
    They generally consist of a timestamp and a random component.
    This generator uses the `ulid-py` library to create ULIDs.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def new_id(self) -> str:
        """Generate a new ULID (serialized across threads)."""
        with self._lock:
            return str(monotonic.new())


class SequentialIdGenerator(IdGenerator):
    """Monotonic counter producing zero-padded, prefixed IDs.

    Note:
        Counters restart with the process; use for tests, demos and the
        in-memory backend only.
    """

    def __init__(self, prefix: str = "", length: int = 8) -> None:
        self._counter = 0
        self._prefix = prefix
        self._length = length
        self._lock = threading.Lock()

    def new_id(self) -> str:
        """Generate the next identifier in sequence."""
        with self._lock:
            self._counter += 1
            return f"{self._prefix}{self._counter:0{self._length}d}"
