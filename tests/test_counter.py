from __future__ import annotations

import logging as py_logging

import pytest

from waitloop.errors import ConfigurationError
from waitloop.strategies import Counter


def test_counter_counts_from_one_after_reset() -> None:
    counter = Counter(3)
    counter.reset()
    counter.increment()
    assert counter.attempt == 1
    assert not counter.is_last_attempt()

    counter.increment()
    counter.increment()
    assert counter.attempt == 3
    assert counter.is_last_attempt()

    counter.reset()
    assert counter.attempt == 0


def test_counter_renders_progress() -> None:
    counter = Counter(5)
    counter.increment()
    counter.increment()
    assert str(counter) == "2/5"


@pytest.mark.parametrize("maximum", [0, -1, 2.5, "3", True, None])
def test_counter_rejects_invalid_maximum(maximum: object) -> None:
    with pytest.raises(ConfigurationError, match="invalid number of attempts"):
        Counter(maximum)  # type: ignore[arg-type]


def test_counter_logs_each_attempt(caplog: pytest.LogCaptureFixture, wait_logger: py_logging.Logger) -> None:
    counter = Counter(2, logger=wait_logger)
    with caplog.at_level(py_logging.DEBUG, logger="tests.waitloop"):
        counter.increment()
        counter.increment()

    assert [record.getMessage() for record in caplog.records] == ["attempt 1/2", "attempt 2/2"]
