"""Command line entrypoint: block until a command succeeds or a port opens."""

from __future__ import annotations

import argparse
import logging as py_logging
import math
import sys
from collections.abc import Sequence
from pathlib import Path

from .config import load_options
from .errors import ExitCode, WaitError, user_facing_error
from .logging import configure_logging
from .probes import command_succeeds, parse_address, port_open
from .wait import Wait

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("--attempts must be an integer") from exc
    if number <= 0:
        raise argparse.ArgumentTypeError("--attempts must be greater than 0")
    return number


def _seconds(value: str) -> float:
    try:
        number = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number of seconds: {value}") from exc
    if not math.isfinite(number) or number < 0:
        raise argparse.ArgumentTypeError("seconds must be a finite, non-negative number")
    return number


def _positive_seconds(value: str) -> float:
    number = _seconds(value)
    if number == 0:
        raise argparse.ArgumentTypeError("--timeout must be greater than 0")
    return number


def _log_level_type(value: str) -> str:
    normalized = value.upper()
    if normalized == "WARNING":
        normalized = "WARN"
    if normalized not in _VALID_LOG_LEVELS:
        accepted = ", ".join(_VALID_LOG_LEVELS)
        raise argparse.ArgumentTypeError(f"--log-level must be one of: {accepted}")
    return normalized


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="waitloop",
        description="Retry a command or TCP connection until it succeeds.",
    )
    parser.add_argument("--attempts", type=_positive_int, default=None)
    parser.add_argument("--timeout", type=_positive_seconds, default=None, help="Per-attempt timeout in seconds")
    parser.add_argument("--delay", type=_seconds, default=None, help="Initial delay between attempts")
    parser.add_argument("--exponential", action="store_true", default=None, help="Double the delay after each retry")
    parser.add_argument("--debug", action="store_true", default=None, help="Log every attempt")
    parser.add_argument("--config", type=Path, default=None, help="TOML file with a [wait] table")
    parser.add_argument("--port", default=None, metavar="HOST:PORT")
    parser.add_argument("--log-level", type=_log_level_type, default="WARN")
    parser.add_argument("--log-file", type=Path, default=None)
    parser.add_argument("command", nargs=argparse.REMAINDER)
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    namespace = parser.parse_args(argv)
    if namespace.command and namespace.command[0] == "--":
        namespace.command = namespace.command[1:]
    if bool(namespace.port) == bool(namespace.command):
        parser.error("pass either --port HOST:PORT or a command after --")
    return namespace


def _enable_debug(logger: py_logging.Logger) -> None:
    logger.setLevel(py_logging.DEBUG)
    for handler in logger.handlers:
        handler.setLevel(py_logging.DEBUG)


def run_cli_flow(namespace: argparse.Namespace, logger: py_logging.Logger) -> int:
    options = load_options(
        namespace.config,
        attempts=namespace.attempts,
        timeout=namespace.timeout,
        delay=namespace.delay,
        exponential=namespace.exponential,
        debug=namespace.debug,
    )
    if options.debug:
        _enable_debug(logger)
    wait = Wait.from_options(options, logger=logger.getChild("wait"))

    if namespace.port:
        host, port = parse_address(namespace.port)
        logger.debug("Waiting for %s:%s", host, port)
        wait.until(lambda: port_open(host, port))
    else:
        command = list(namespace.command)
        logger.debug("Waiting for command to succeed: %s", command)
        completed = wait.until(lambda: command_succeeds(command))
        if completed.stdout:
            sys.stdout.write(completed.stdout)
    return int(ExitCode.SUCCESS)


def main(argv: Sequence[str] | None = None) -> int:
    try:
        namespace = parse_args(argv)
    except SystemExit as exc:
        return int(exc.code or 0)

    logger = configure_logging(level=namespace.log_level, log_file=namespace.log_file)

    try:
        return run_cli_flow(namespace, logger)
    except WaitError as exc:
        logger.debug(
            "Handled %s (code=%s): %s",
            type(exc).__name__,
            int(exc.code),
            exc.message,
            exc_info=logger.isEnabledFor(py_logging.DEBUG),
        )
        print(user_facing_error(exc.message, hint=exc.hint), file=sys.stderr)
        return int(exc.code)
    except Exception:
        logger.exception("Unhandled exception in CLI entrypoint")
        print(user_facing_error("Unexpected runtime failure"), file=sys.stderr)
        return int(ExitCode.RUNTIME_ERROR)


def run(argv: Sequence[str] | None = None) -> int:
    return main(argv)
