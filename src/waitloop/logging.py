"""Logging sinks: one per Wait instance, plus the CLI process logger."""

from __future__ import annotations

import logging as py_logging
import sys
from pathlib import Path
from typing import TextIO

LOG_LEVELS = {
    "DEBUG": py_logging.DEBUG,
    "INFO": py_logging.INFO,
    "WARN": py_logging.WARNING,
    "WARNING": py_logging.WARNING,
    "ERROR": py_logging.ERROR,
}
WAIT_LOGGER_NAME = "waitloop.wait"
CLI_LOGGER_NAME = "waitloop"
_CLI_FORMAT = "%(asctime)s %(levelname)s %(name)s:%(lineno)d %(message)s"
_WAIT_FORMAT = "%(levelname)s %(message)s"


def resolve_level(level: str) -> int:
    return LOG_LEVELS.get(level.upper(), py_logging.INFO)


def _handler(handler: py_logging.Handler, level: int, fmt: str) -> py_logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(py_logging.Formatter(fmt))
    return handler


def _file_handler(log_file: str | Path, fmt: str) -> py_logging.Handler | None:
    """Open ``log_file`` for DEBUG output; an unwritable location yields no handler."""
    try:
        log_path = Path(log_file).expanduser()
    except RuntimeError:
        log_path = Path(log_file)
    try:
        log_path.resolve().parent.mkdir(parents=True, exist_ok=True)
        return _handler(py_logging.FileHandler(log_path.resolve(), encoding="utf-8"), py_logging.DEBUG, fmt)
    except OSError:
        return None


def _attach(
    logger: py_logging.Logger,
    level: int,
    stream: TextIO | None,
    fmt: str,
    log_file: str | Path | None = None,
) -> py_logging.Logger:
    logger.setLevel(level)
    logger.handlers.clear()
    logger.addHandler(_handler(py_logging.StreamHandler(stream), level, fmt))
    if log_file:
        file_handler = _file_handler(log_file, fmt)
        if file_handler is not None:
            logger.addHandler(file_handler)
    logger.propagate = False
    return logger


def create_logger(debug: bool = False, stream: TextIO | None = None) -> py_logging.Logger:
    """Build a logging sink owned by a single Wait instance.

    The logger is instantiated directly instead of through ``getLogger`` so it
    is not registered in the logging manager and dies with its owner.
    """
    level = py_logging.DEBUG if debug else py_logging.WARNING
    return _attach(py_logging.Logger(WAIT_LOGGER_NAME), level, stream or sys.stdout, _WAIT_FORMAT)


def configure_logging(
    level: str = "INFO",
    stream: TextIO | None = None,
    *,
    log_file: str | Path | None = None,
) -> py_logging.Logger:
    return _attach(
        py_logging.getLogger(CLI_LOGGER_NAME),
        resolve_level(level),
        stream or sys.stderr,
        _CLI_FORMAT,
        log_file=log_file,
    )
