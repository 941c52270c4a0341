"""Synchronous command dispatch.

The bus is the single way into the write side: ``AvailabilityAPI`` turns each
call into a command and hands it to :meth:`MessageBus.handle`, which returns
whatever the handler returns (a ``Booking``, an ``AvailabilityBlock``, an
``ImportReport`` ...).
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Mapping
from typing import Any

from gigcal.interfaces.unit_of_work import AbstractUnitOfWork

from .commands import Command

logger = logging.getLogger(__name__)

# pylint: disable=too-few-public-methods

UnitOfWorkFactory = Callable[[], AbstractUnitOfWork]
Handler = Callable[[Command], Any]


class NoHandlerForCommand(LookupError):
    """No handler is registered for the command's type."""

    def __init__(self, cmd: Command) -> None:
        super().__init__(f"No handler found for command {type(cmd).__name__}")


def handler_name(handler: Callable[..., Any]) -> str:
    """Name to log for a handler, looking through ``functools.partial``."""
    while isinstance(handler, functools.partial):
        handler = handler.func
    return getattr(handler, "__name__", None) or repr(handler)


class MessageBus:
    """Route each command to the handler registered for its type.

    Args:
        uow_factory: Builds a fresh unit of work. Handlers get the same
            factory injected and open one unit of work per command; queries
            read it from here.
        command_handlers: Command type to single-argument callable.
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        command_handlers: Mapping[type[Command], Handler],
    ) -> None:
        self.uow_factory = uow_factory
        self._command_handlers = dict(command_handlers)

    def handle(self, cmd: Command) -> Any:
        """Run the handler for ``cmd`` and return its result.

        Raises:
            NoHandlerForCommand: if nothing handles ``type(cmd)``.
            Exception: whatever the handler raised, after logging it.
        """
        handler = self._command_handlers.get(type(cmd))
        if handler is None:
            logger.error("No handler found for command %s", type(cmd).__name__)
            raise NoHandlerForCommand(cmd)

        name = handler_name(handler)
        logger.debug("Handling command %s with handler %s", cmd, name)
        try:
            return handler(cmd)
        except Exception:
            logger.exception("Exception handling command %s with handler %s", cmd, name)
            raise
