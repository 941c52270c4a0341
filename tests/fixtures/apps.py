"""Wired applications and units of work for tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

import pytest

from gigcal.adapters.id_generators import SequentialIdGenerator
from gigcal.adapters.memory import InMemoryAvailabilityData, InMemoryUnitOfWork
from gigcal.adapters.notifiers import InMemoryNotifier, InMemoryPartyDirectory
from gigcal.adapters.unit_of_work import SqlAlchemyUnitOfWork
from gigcal.bootstrap import bootstrap, bootstrap_in_memory
from gigcal.domain.value_objects import Party
from gigcal.entrypoints.api import AvailabilityAPI

if TYPE_CHECKING:
    from gigcal.bootstrap import AppContainer
    from gigcal.interfaces.unit_of_work import AbstractUnitOfWork

# pylint: disable=redefined-outer-name

UOW_BACKENDS = ["memory", "sqlite"]


@pytest.fixture
def notifier() -> InMemoryNotifier:
    return InMemoryNotifier()


@pytest.fixture
def directory() -> InMemoryPartyDirectory:
    """Directory knowing artist 7 and venue v1."""
    parties = InMemoryPartyDirectory()
    parties.add_artist(Party("7", "Nina Keys", "nina@example.com"))
    parties.add_venue(Party("v1", "Blue Room", "desk@blueroom.example"))
    return parties


@pytest.fixture
def memory_app(notifier, directory) -> AppContainer:
    """In-memory application with sequential ids and a recording notifier."""
    return bootstrap_in_memory(
        block_ids=SequentialIdGenerator(prefix="blk-"),
        booking_ids=SequentialIdGenerator(prefix="bkg-"),
        notifier=notifier,
        directory=directory,
        ical_product="Gigcal",
        ical_domain="gigcal.test",
    )


@pytest.fixture
def sqlite_app(
    sqlite_url, sqlite_engine_file, notifier, directory
) -> AppContainer:  # pylint: disable=unused-argument
    """SQLite-backed application on a migrated temp file."""
    return bootstrap(
        sqlite_url,
        block_ids=SequentialIdGenerator(prefix="blk-"),
        booking_ids=SequentialIdGenerator(prefix="bkg-"),
        notifier=notifier,
        directory=directory,
        ical_product="Gigcal",
        ical_domain="gigcal.test",
    )


@pytest.fixture(params=["memory", "sqlite"])
def app(request: pytest.FixtureRequest) -> AppContainer:
    """The wired application over each local backend."""
    return request.getfixturevalue(f"{request.param}_app")


@pytest.fixture
def api(app) -> AvailabilityAPI:
    return AvailabilityAPI(app)


@pytest.fixture
def memory_api(memory_app) -> AvailabilityAPI:
    return AvailabilityAPI(memory_app)


@pytest.fixture(params=UOW_BACKENDS)
def uow_factory(
    request: pytest.FixtureRequest,
) -> Iterator[Callable[[], AbstractUnitOfWork]]:
    """Factory of fresh units of work over one shared backend.

    Supported params:
      - ``"memory"``: InMemoryUnitOfWork over one InMemoryAvailabilityData
      - ``"sqlite"``: SqlAlchemyUnitOfWork over a migrated SQLite file
    """
    ids = SequentialIdGenerator(prefix="blk-")
    match request.param:
        case "memory":
            data = InMemoryAvailabilityData()
            yield lambda: InMemoryUnitOfWork(data, ids)
        case "sqlite":
            engine = request.getfixturevalue("sqlite_engine_file")
            yield lambda: SqlAlchemyUnitOfWork(engine, ids)
        case _:
            raise ValueError(f"unknown unit of work backend: {request.param}")
