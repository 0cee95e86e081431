from __future__ import annotations

import io
import logging as py_logging
from pathlib import Path

import waitloop.logging as wl_logging
from waitloop import Wait


def test_warning_alias_maps_to_warning_level() -> None:
    logger = wl_logging.configure_logging("warning")

    assert logger.level == wl_logging.LOG_LEVELS["WARN"]


def test_unknown_log_level_falls_back_to_info() -> None:
    logger = wl_logging.configure_logging("not-a-level")

    assert logger.level == py_logging.INFO


def test_configure_logging_resets_existing_handlers() -> None:
    logger = wl_logging.configure_logging("INFO")
    assert len(logger.handlers) == 1

    logger = wl_logging.configure_logging("INFO")
    assert len(logger.handlers) == 1


def test_configure_logging_adds_debug_file_handler(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "waitloop.log"

    logger = wl_logging.configure_logging("ERROR", log_file=log_file)
    file_handlers = [
        handler for handler in logger.handlers if isinstance(handler, py_logging.FileHandler)
    ]

    assert len(file_handlers) == 1
    assert file_handlers[0].level == py_logging.DEBUG
    assert log_file.exists()


def test_configure_logging_ignores_file_handler_oserror(monkeypatch, tmp_path: Path) -> None:
    def raise_os_error(*args: object, **kwargs: object) -> py_logging.Handler:
        raise OSError("disk full")

    monkeypatch.setattr(wl_logging.py_logging, "FileHandler", raise_os_error)

    logger = wl_logging.configure_logging("INFO", log_file=tmp_path / "nope" / "waitloop.log")

    assert len(logger.handlers) == 1
    assert type(logger.handlers[0]) is py_logging.StreamHandler


def test_create_logger_is_not_registered_globally() -> None:
    first = wl_logging.create_logger()
    second = wl_logging.create_logger()

    assert first is not second
    assert py_logging.getLogger(wl_logging.WAIT_LOGGER_NAME) is not first
    assert first.propagate is False


def test_create_logger_levels_follow_debug_flag() -> None:
    assert wl_logging.create_logger(debug=True).level == py_logging.DEBUG
    assert wl_logging.create_logger(debug=False).level == py_logging.WARNING


def test_debug_wait_writes_attempt_trace_to_stream() -> None:
    stream = io.StringIO()
    logger = wl_logging.create_logger(debug=True, stream=stream)
    results = iter([None, "up"])
    wait = Wait(attempts=2, logger=logger, delay=0)

    assert wait.until(lambda: next(results)) == "up"

    output = stream.getvalue()
    assert "DEBUG attempt 1/2" in output
    assert "DEBUG Rescued exception while waiting: ResultInvalid: result was None" in output
    assert "DEBUG Attempt 1/2 failed, delaying for 0.0s" in output
    assert "DEBUG attempt 2/2" in output


def test_quiet_wait_writes_nothing() -> None:
    stream = io.StringIO()
    wait = Wait(attempts=2, logger=wl_logging.create_logger(stream=stream), delay=0)

    assert wait.until(lambda attempt: attempt == 2 or None) is True
    assert stream.getvalue() == ""
