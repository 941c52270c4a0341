"""Fixtures shared by the storage contract tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

import pytest

from gigcal.adapters.id_generators import SequentialIdGenerator
from gigcal.adapters.memory import InMemoryAvailabilityData, InMemoryUnitOfWork
from gigcal.adapters.unit_of_work import SqlAlchemyUnitOfWork

if TYPE_CHECKING:
    from gigcal.interfaces.unit_of_work import AbstractUnitOfWork


@pytest.fixture(params=["memory", "sqlite", "postgres"])
def store_uow_factory(
    request: pytest.FixtureRequest,
) -> Iterator[Callable[[], AbstractUnitOfWork]]:
    """Fresh units of work over one backend; every backend must pass the same tests.

    Supported params:
      - ``"memory"``: InMemoryUnitOfWork
      - ``"sqlite"``: SqlAlchemyUnitOfWork on a migrated SQLite file
      - ``"postgres"``: SqlAlchemyUnitOfWork on the session Postgres container
    """
    ids = SequentialIdGenerator(prefix="blk-")
    match request.param:
        case "memory":
            data = InMemoryAvailabilityData()
            yield lambda: InMemoryUnitOfWork(data, ids)
        case "sqlite" | "postgres":
            engine = request.getfixturevalue(
                "sqlite_engine_file" if request.param == "sqlite" else "postgres_engine"
            )
            yield lambda: SqlAlchemyUnitOfWork(engine, ids)
        case _:
            raise ValueError(f"unknown store type: {request.param}")


@pytest.fixture
def write(store_uow_factory):
    """Run ``fn(uow)`` in a unit of work holding artist 7's lock, then commit."""

    def _write(fn, artist_id: str = "7"):
        with store_uow_factory() as uow:
            uow.lock_artist(artist_id)
            result = fn(uow)
            uow.commit()
        return result

    return _write


@pytest.fixture
def read(store_uow_factory):
    """Run ``fn(uow)`` in a fresh unit of work without committing."""

    def _read(fn):
        with store_uow_factory() as uow:
            return fn(uow)

    return _read
