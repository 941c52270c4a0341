"""Logging setup for the GIGCAL CLI.

Console output goes through Rich. A "flight recorder" keeps recent records in
memory at DEBUG granularity and dumps them to a file once something goes
wrong, so a failed booking import can be diagnosed after the fact without
running the whole CLI at ``-vvv``.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from dataclasses import dataclass, field
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

import alembic
import sqlalchemy
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from logging import Logger

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "gigcal"

ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]


class ThirdPartyPrefixFilter(logging.Filter):
    """Tag records from other libraries with ``[libname]``.

    Sets ``record.prefix`` for the console format: empty for gigcal loggers,
    the top-level package name in brackets for everything else. Never drops
    a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith(PROJECT_PREFIX):
            record.prefix = ""
        else:
            record.prefix = f"[{record.name.split('.')[0]}]"
        return True


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Build the Rich console handler writing to stderr.

    Args:
        level: Minimum level shown on the console; forced to DEBUG in debug mode.
        debug_mode: Show timestamps, logger names and source locations.
        color: Follow click-extra's ``--color/--no-color`` switch.

    Returns:
        RichHandler: Handler ready to attach to the root logger.
    """
    color_system: ColorSystem | None = "auto" if color else None
    console = Console(color_system=color_system, stderr=True)

    if debug_mode:
        level = logging.DEBUG

    handler = RichHandler(
        level=level,
        console=console,
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )

    if debug_mode:
        handler.setFormatter(
            logging.Formatter(fmt="%(asctime)s %(name)s: %(message)s")
        )
    else:
        handler.setFormatter(logging.Formatter(fmt="%(prefix)s %(message)s"))
        handler.addFilter(ThirdPartyPrefixFilter())

    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Build the in-memory flight recorder.

    Up to ``capacity`` records are buffered and written to ``path`` when a
    record at ``flush_level`` or above arrives, or when the handler closes if
    ``flush_on_close`` is set. The file is opened lazily so a clean run that
    never flushes leaves no empty log behind.
    """
    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8", delay=True)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(process)d:%(threadName)s] "
            "%(levelname)s %(name)s:%(lineno)d: %(message)s"
        )
    )
    return MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=file_handler,
        flushOnClose=flush_on_close,
    )


@dataclass(frozen=True)
class LoggingSettings:  # pylint: disable=too-many-instance-attributes
    """Logging options collected from the command line."""

    level: int = logging.WARNING
    debug: bool = False
    color: bool = True
    log_path: Path | None = None
    flight_recorder: bool = True
    flight_capacity: int = 2000
    force_flush: bool = False
    logger_levels: dict[str, int] = field(default_factory=dict)


def verbosity_to_level(verbose_count: int, quiet_count: int) -> int:
    """Shift WARNING by one level per ``-v``/``-q``, clamped to DEBUG..CRITICAL."""
    level = logging.WARNING - (10 * verbose_count) + (10 * quiet_count)
    return max(logging.DEBUG, min(logging.CRITICAL, level))


def configure_logging(settings: LoggingSettings) -> list[logging.Handler]:
    """Install the console handler and, if enabled, the flight recorder.

    The root logger is set to DEBUG and replaces any earlier configuration;
    the handlers do the filtering. Per-logger levels are applied last.

    Returns:
        The handlers attached to the root logger.
    """
    handlers: list[logging.Handler] = [
        config_console_handler(
            level=settings.level, debug_mode=settings.debug, color=settings.color
        )
    ]
    if settings.flight_recorder and settings.log_path is not None:
        handlers.append(
            config_flight_recorder(
                path=settings.log_path,
                capacity=settings.flight_capacity,
                flush_on_close=settings.force_flush,
            )
        )

    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)

    for name, lvl in settings.logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    return handlers


def log_startup(
    logger: Logger,
    *,
    app_version: str,
    settings: LoggingSettings,
    handlers: list[logging.Handler],
) -> None:
    """Emit a one-line INFO banner followed by DEBUG environment details."""
    flight_recorder = settings.flight_recorder and settings.log_path is not None
    logger.info(
        "GIGCAL %s: console=%s, flight-recorder=%s",
        app_version,
        logging.getLevelName(settings.level),
        "ON" if flight_recorder else "OFF",
    )

    logger.debug("Python: %s", sys.version.split()[0])
    logger.debug("Platform: %s %s", platform.system(), platform.release())
    logger.debug("PID: %s", os.getpid())
    logger.debug("CWD: %s", Path.cwd())
    logger.debug("Alembic: %s", alembic.__version__)
    logger.debug("SQLAlchemy: %s", sqlalchemy.__version__)
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    if flight_recorder:
        logger.debug(
            "Flight recorder: path=%s, capacity=%s, flush_on_close=%s",
            settings.log_path,
            settings.flight_capacity,
            settings.force_flush,
        )
    logger.debug(
        "Per-logger overrides: %s",
        {
            name: logging.getLevelName(lvl)
            for name, lvl in settings.logger_levels.items()
        }
        or "<none>",
    )
