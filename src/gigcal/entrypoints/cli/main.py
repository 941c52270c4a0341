"""GIGCAL CLI entry point.

Defines the top-level ``gigcal`` command (via Click-Extra) and registers its
command groups:

- ``gigcal db``: forward-only schema management.
- ``gigcal blocks``: blackout blocks, calendar import and iCal export.
- ``gigcal bookings``: admission checks, booking listing and reconciliation.

Examples
    $ gigcal --version
    $ gigcal db upgrade
    $ gigcal blocks create 7 2026-03-01 2026-03-05 --reason Tour
    $ gigcal bookings check 7 2026-03-03
"""

import logging
from pathlib import Path

import click
import click_extra as clickx
from platformdirs import user_log_dir

from gigcal import __version__
from gigcal.logging import (
    LoggingSettings,
    configure_logging,
    log_startup,
    verbosity_to_level,
)

from .blocks import blocks as blocks_group
from .bookings import bookings as bookings_group
from .db import db as db_group
from .helpers import hyperlink
from .helpers.log_level_parser import parse_log_level

logger = logging.getLogger(__name__)


HELP = """GIGCAL command-line interface.

    GIGCAL keeps artist calendars for a booking marketplace: explicit
    availability, one-off and recurring blackout blocks, and the admission
    check that decides whether a venue can book an artist for a date range.
    """

EPILOG = "\b\n" + "\n".join(
    [
        f"{click.style('See Also:', fg='blue', bold=True, underline=True)}",
        "  iCalendar: " + hyperlink("https://www.rfc-editor.org/rfc/rfc5545"),
    ]
)


def default_log_path() -> Path:
    """``latest.log`` in the per-user log directory."""
    log_dir = user_log_dir("gigcal", appauthor=False, ensure_exists=True)
    return Path(log_dir) / "latest.log"


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
    epilog=EPILOG,
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help="Raise console verbosity one level above WARNING per repetition.",
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help="Lower console verbosity one level below WARNING per repetition.",
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Debug console format: timestamps, logger names and source paths.",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Flight recorder file (defaults to latest.log in the user log directory).",
    default=None,
    envvar="GIGCAL_LOG_PATH",
    show_envvar=True,
)
@click.option(
    "--flight-recorder-capacity",
    type=click.IntRange(min=1),
    default=2000,
    hidden=True,
    envvar="GIGCAL_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Number of log records the flight recorder keeps.",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Keep the most recent log records at DEBUG level in memory and write "
        "them to --log-path when a WARNING or ERROR is logged."
    ),
    default=True,
    show_envvar=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush",
    is_flag=True,
    help="Also write the flight recorder to --log-path on a clean exit.",
    default=False,
    show_default=True,
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    envvar="GIGCAL_LOGGER_LEVELS",
    help=(
        "Minimum level for a named logger (NAME=LEVEL). Applies to console and "
        "flight recorder alike. Repeatable, e.g. -L sqlalchemy=INFO."
    ),
    default=("sqlalchemy=WARNING", "alembic=WARNING"),
    show_default=True,
    show_envvar=True,
)
@clickx.pass_context
def gigcal(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path | None,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush: bool,
    logger_levels: dict[str, int],
) -> None:
    """GIGCAL command-line interface."""
    if flight_recorder and log_path is None:
        log_path = default_log_path()

    settings = LoggingSettings(
        level=verbosity_to_level(verbose_count, quiet_count),
        debug=debug,
        color=ctx.color is not False,
        log_path=log_path,
        flight_recorder=flight_recorder,
        flight_capacity=flight_recorder_capacity,
        force_flush=force_flush,
        logger_levels=logger_levels,
    )
    handlers = configure_logging(settings)
    log_startup(logger, app_version=__version__, settings=settings, handlers=handlers)

    ctx.call_on_close(logging.shutdown)


gigcal.add_command(db_group)
gigcal.add_command(blocks_group)
gigcal.add_command(bookings_group)
