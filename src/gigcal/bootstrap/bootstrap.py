"""Build the message bus with handlers, unit-of-work factory and collaborators."""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from gigcal import config
from gigcal.adapters.db.engine import make_engine
from gigcal.adapters.id_generators import ULIDGenerator
from gigcal.adapters.memory import InMemoryAvailabilityData, InMemoryUnitOfWork
from gigcal.adapters.notifiers import InMemoryPartyDirectory, LoggingNotifier
from gigcal.adapters.unit_of_work import SqlAlchemyUnitOfWork
from gigcal.service_layer.handlers import COMMAND_HANDLERS
from gigcal.service_layer.messagebus import MessageBus, UnitOfWorkFactory

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from gigcal.interfaces.id_generator import IdGenerator
    from gigcal.interfaces.notifier import Notifier, PartyDirectory
    from gigcal.service_layer.commands import Command


@dataclass(frozen=True)
class AppContainer:
    """Wired application: the bus plus what entrypoints read directly."""

    message_bus: MessageBus
    uow_factory: UnitOfWorkFactory
    ical_product: str
    ical_domain: str


def build_sqlalchemy_uow_factory(
    engine: Engine, block_ids: IdGenerator
) -> UnitOfWorkFactory:
    """Factory of SQLAlchemy units of work sharing one engine."""
    return lambda: SqlAlchemyUnitOfWork(engine, block_ids)


def build_in_memory_uow_factory(
    data: InMemoryAvailabilityData, block_ids: IdGenerator
) -> UnitOfWorkFactory:
    """Factory of in-memory units of work sharing one data store."""
    return lambda: InMemoryUnitOfWork(data, block_ids)


def build_message_bus(
    uow_factory: UnitOfWorkFactory,
    command_handlers: Mapping[type[Command], Callable[..., Any]],
    dependencies: Mapping[str, object],
) -> MessageBus:
    """Build a message bus with injected dependencies.

    ``uow_factory`` is always available to handlers; ``dependencies`` adds
    the rest by parameter name.
    """
    dependencies = {"uow_factory": uow_factory, **dependencies}
    injected_command_handlers = {
        command_type: inject_dependencies(handler, dependencies)
        for command_type, handler in command_handlers.items()
    }
    return MessageBus(uow_factory, command_handlers=injected_command_handlers)


def _assemble(  # pylint: disable=too-many-arguments
    uow_factory: UnitOfWorkFactory,
    *,
    booking_ids: IdGenerator | None,
    notifier: Notifier | None,
    directory: PartyDirectory | None,
    ical_product: str | None,
    ical_domain: str | None,
) -> AppContainer:
    dependencies = {
        "id_generator": booking_ids or ULIDGenerator(),
        "notifier": notifier or LoggingNotifier(),
        "directory": directory or InMemoryPartyDirectory(),
    }
    return AppContainer(
        message_bus=build_message_bus(uow_factory, COMMAND_HANDLERS, dependencies),
        uow_factory=uow_factory,
        ical_product=ical_product or config.get_ical_product(),
        ical_domain=ical_domain or config.get_ical_domain(),
    )


def bootstrap(  # pylint: disable=too-many-arguments
    db_url: str | None = None,
    *,
    block_ids: IdGenerator | None = None,
    booking_ids: IdGenerator | None = None,
    notifier: Notifier | None = None,
    directory: PartyDirectory | None = None,
    ical_product: str | None = None,
    ical_domain: str | None = None,
) -> AppContainer:
    """Wire the application against a SQL database.

    Args:
        db_url: SQLAlchemy URL; read from ``GIGCAL_DB_URL`` when omitted.
        block_ids: Block id source (ULIDs by default).
        booking_ids: Booking id source (ULIDs by default).
        notifier: Status-change collaborator (logs by default).
        directory: Artist/venue identity lookup (placeholders by default).
        ical_product: PRODID product; ``GIGCAL_ICAL_PRODUCT`` by default.
        ical_domain: UID domain; ``GIGCAL_ICAL_DOMAIN`` by default.

    Raises:
        DatabaseUrlNotSetError: if no URL is given and none is configured.
    """
    engine = make_engine(db_url or config.get_db_url())
    return _assemble(
        build_sqlalchemy_uow_factory(engine, block_ids or ULIDGenerator()),
        booking_ids=booking_ids,
        notifier=notifier,
        directory=directory,
        ical_product=ical_product,
        ical_domain=ical_domain,
    )


def bootstrap_in_memory(  # pylint: disable=too-many-arguments
    data: InMemoryAvailabilityData | None = None,
    *,
    block_ids: IdGenerator | None = None,
    booking_ids: IdGenerator | None = None,
    notifier: Notifier | None = None,
    directory: PartyDirectory | None = None,
    ical_product: str | None = None,
    ical_domain: str | None = None,
) -> AppContainer:
    """Wire the application against process memory; same options as ``bootstrap``."""
    return _assemble(
        build_in_memory_uow_factory(
            data if data is not None else InMemoryAvailabilityData(),
            block_ids or ULIDGenerator(),
        ),
        booking_ids=booking_ids,
        notifier=notifier,
        directory=directory,
        ical_product=ical_product,
        ical_domain=ical_domain,
    )


def inject_dependencies(
    handler: Callable, dependencies: Mapping[str, object]
) -> Callable:
    """Bind the dependencies a handler declares as parameters."""
    params = inspect.signature(handler).parameters
    deps = {
        name: dependency for name, dependency in dependencies.items() if name in params
    }
    return functools.partial(handler, **deps)
