"""Service layer handlers."""

from collections.abc import Callable

from .availability_handlers import COMMAND_HANDLERS as AVAILABILITY_COMMAND_HANDLERS
from .booking_handlers import COMMAND_HANDLERS as BOOKING_COMMAND_HANDLERS
from .sync_handlers import COMMAND_HANDLERS as SYNC_COMMAND_HANDLERS

__all__ = ["COMMAND_HANDLERS"]

COMMAND_HANDLERS: dict[type, Callable[..., object]] = {
    **AVAILABILITY_COMMAND_HANDLERS,
    **BOOKING_COMMAND_HANDLERS,
    **SYNC_COMMAND_HANDLERS,
}
