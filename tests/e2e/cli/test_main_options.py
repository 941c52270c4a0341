"""End-to-end tests for the top-level ``gigcal`` options.

Verbosity flags, per-logger levels, debug formatting and the flight recorder
are exercised through the test-only ``log-demo`` command.
"""

import re
from pathlib import Path

import pytest

from gigcal import __version__
from gigcal.entrypoints.cli.main import gigcal

# pylint: disable=unused-argument

LOG_PATH = "flight.log"


def assert_in_output(pattern: str, output: str) -> None:
    if not re.search(pattern, output, re.MULTILINE):
        raise AssertionError(f"Pattern '{pattern}' not found in output:\n{output}")


def assert_not_in_output(pattern: str, output: str) -> None:
    if re.search(pattern, output, re.MULTILINE):
        raise AssertionError(f"Pattern '{pattern}' found in output:\n{output}")


def read_log(path: str = LOG_PATH) -> str:
    return Path(path).read_text(encoding="utf-8")


def test_help_lists_command_groups(runner):
    result = runner.invoke(gigcal, ["--help"])
    assert result.exit_code == 0
    for group in ("db", "blocks", "bookings"):
        assert_in_output(rf"^\s+{group}\b", result.output)


def test_version(runner):
    result = runner.invoke(gigcal, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


@pytest.mark.parametrize(
    "flags, shown, hidden",
    [
        ([], "WARNING", "INFO"),
        (["-v"], "INFO", "DEBUG"),
        (["-q"], "ERROR", "WARNING"),
        (["-qq"], "CRITICAL", "ERROR"),
    ],
    ids=["default", "verbose", "quiet", "very-quiet"],
)
def test_console_verbosity(registered_log_demo, runner, fs, flags, shown, hidden):
    result = runner.invoke(gigcal, ["--no-flight-recorder", *flags, "log-demo"])
    assert result.exit_code == 0
    assert_in_output(shown, result.stderr)
    assert_not_in_output(hidden, result.stderr)


def test_vv_shows_debug(registered_log_demo, runner, fs):
    result = runner.invoke(gigcal, ["--no-flight-recorder", "-vv", "log-demo"])
    assert "demo debug record" in result.stderr


def test_log_output_stays_off_stdout(registered_log_demo, runner, fs):
    result = runner.invoke(gigcal, ["--no-flight-recorder", "-vv", "log-demo"])
    assert result.stdout == ""


def test_third_party_records_are_tagged(registered_log_demo, runner, fs):
    result = runner.invoke(gigcal, ["--no-flight-recorder", "log-demo"])
    assert_in_output(r"\[vendor\] vendor warning record", result.stderr)
    assert_not_in_output(r"\[gigcal\]", result.stderr)


@pytest.mark.parametrize(
    "env, cli_args",
    [
        ({}, ["-vv", "-L", "vendor.lib=INFO"]),
        ({"GIGCAL_LOGGER_LEVELS": "vendor.lib=INFO"}, ["-vv"]),
    ],
    ids=["cli-flag", "env-var"],
)
def test_logger_level_override(registered_log_demo, runner, fs, env, cli_args):
    result = runner.invoke(
        gigcal, ["--no-flight-recorder", *cli_args, "log-demo"], env=env
    )
    assert result.exit_code == 0
    assert "vendor debug record" not in result.stderr
    assert "vendor info record" in result.stderr
    assert "demo debug record" in result.stderr


def test_bad_logger_level_is_a_usage_error(runner, fs):
    result = runner.invoke(gigcal, ["-L", "vendor=LOUD", "db", "heads"])
    assert result.exit_code == 2


def test_debug_mode_shows_source_paths(registered_log_demo, runner, fs):
    result = runner.invoke(gigcal, ["--no-flight-recorder", "--debug", "log-demo"])
    assert result.exit_code == 0
    assert_in_output(r"conftest\.py:\d+", result.stderr)


def test_source_paths_hidden_by_default(registered_log_demo, runner, fs):
    result = runner.invoke(gigcal, ["--no-flight-recorder", "log-demo"])
    assert_not_in_output(r"conftest\.py:\d+", result.stderr)


def test_flight_recorder_dumps_on_warning(registered_log_demo, runner, fs):
    result = runner.invoke(
        gigcal, ["--log-path", LOG_PATH, "-L", "vendor.lib=INFO", "log-demo"]
    )
    assert result.exit_code == 0
    content = read_log()
    assert "demo debug record" in content
    assert "demo critical record" in content
    assert "vendor info record" in content
    assert "vendor debug record" not in content
    # buffered after the last flush and never written
    assert "demo trailing debug record" not in content


def test_flight_recorder_force_flush(registered_log_demo, runner, fs):
    result = runner.invoke(gigcal, ["--log-path", LOG_PATH, "--force-flush", "log-demo"])
    assert result.exit_code == 0
    assert "demo trailing debug record" in read_log()


def test_log_path_from_environment(registered_log_demo, runner, fs):
    result = runner.invoke(gigcal, ["log-demo"], env={"GIGCAL_LOG_PATH": "env.log"})
    assert result.exit_code == 0
    assert "demo error record" in read_log("env.log")


def test_flight_recorder_can_be_disabled(registered_log_demo, runner, fs):
    result = runner.invoke(
        gigcal, ["--log-path", LOG_PATH, "--no-flight-recorder", "log-demo"]
    )
    assert result.exit_code == 0
    assert not Path(LOG_PATH).exists()


def test_clean_run_leaves_no_log_file(runner, fs):
    result = runner.invoke(gigcal, ["--log-path", LOG_PATH, "db", "heads"])
    assert result.exit_code == 0
    assert not Path(LOG_PATH).exists()


def test_flight_recorder_truncates_between_runs(registered_log_demo, runner, fs):
    runner.invoke(gigcal, ["--log-path", LOG_PATH, "log-demo"])
    first = read_log().splitlines()
    runner.invoke(gigcal, ["--log-path", LOG_PATH, "log-demo"])
    assert len(read_log().splitlines()) == len(first)


def test_startup_banner(registered_log_demo, runner, fs):
    result = runner.invoke(
        gigcal, ["--log-path", LOG_PATH, "--force-flush", "log-demo"]
    )
    assert result.exit_code == 0
    content = read_log()
    assert_in_output(r"GIGCAL \S+: console=WARNING, flight-recorder=ON", content)
    assert_in_output(r"Python: \d+\.\d+\.\d+", content)
    assert_in_output(r"SQLAlchemy: \d+\.\d+", content)
    assert_in_output(r"Alembic: \d+\.\d+", content)
    assert_in_output(
        r"Flight recorder: path=flight\.log, capacity=2000, flush_on_close=True",
        content,
    )
    assert_in_output(
        r"Per-logger overrides: {'sqlalchemy': 'WARNING', 'alembic': 'WARNING'}",
        content,
    )
