"""Fixtures for end-to-end tests of the ``gigcal`` command.

Commands run through click's CliRunner in an isolated directory, with the
flight recorder writing to a local file instead of the user log directory.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable
from pathlib import Path

import click
import pytest
from click.testing import CliRunner, Result

from gigcal.entrypoints.cli.main import gigcal

# pylint: disable=redefined-outer-name

ULID_RE = re.compile(r"^[0-9A-HJKMNP-TV-Z]{26}$")


@click.command()
def log_demo():
    """Emit one record per level on a gigcal and a third-party logger."""
    logger = logging.getLogger("gigcal.demo")
    logger.debug("demo debug record")
    logger.info("demo info record")
    logger.warning("demo warning record")
    logger.error("demo error record")
    logger.critical("demo critical record")
    vendor = logging.getLogger("vendor.lib")
    vendor.debug("vendor debug record")
    vendor.info("vendor info record")
    vendor.warning("vendor warning record")
    logger.debug("demo trailing debug record")


@pytest.fixture
def registered_log_demo():
    """Add ``log-demo`` to the top-level group for one test."""
    gigcal.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        gigcal.commands.pop("log-demo", None)
        for section in getattr(gigcal, "_section_set", []):
            getattr(section, "commands", {}).pop("log-demo", None)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test inside an isolated working directory."""
    with runner.isolated_filesystem():
        yield


@pytest.fixture
def cli_env(sqlite_url) -> dict[str, str]:
    """Environment pointing the CLI at the per-test SQLite file."""
    return {
        "GIGCAL_DB_URL": sqlite_url,
        "GIGCAL_LOG_PATH": "flight.log",
        "GIGCAL_ICAL_DOMAIN": "gigcal.test",
    }


@pytest.fixture
def invoke(
    runner, fs, cli_env, sqlite_engine_file
) -> Callable[..., Result]:  # pylint: disable=unused-argument
    """Run ``gigcal`` against a migrated database, e.g. ``invoke("blocks", "list", "7")``."""

    def _invoke(*args: str, input: str | None = None) -> Result:  # pylint: disable=redefined-builtin
        return runner.invoke(gigcal, list(args), env=cli_env, input=input)

    return _invoke


@pytest.fixture
def events_file() -> Callable[[list[dict]], str]:
    """Write calendar events to a JSON file in the working directory."""

    def _write(events: list[dict], name: str = "events.json") -> str:
        Path(name).write_text(json.dumps(events), encoding="utf-8")
        return name

    return _write
