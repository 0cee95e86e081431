from __future__ import annotations

import logging as py_logging
from pathlib import Path

import pytest

from waitloop.strategies import RegularDelayer


@pytest.hookimpl(trylast=True)
def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    del config
    for item in items:
        path = Path(str(getattr(item, "path", item.fspath)))
        if "integration" in path.parts:
            item.add_marker(pytest.mark.integration)
            item.add_marker(pytest.mark.slow)


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def instant_delayer(sleeps: list[float]) -> RegularDelayer:
    return RegularDelayer(1.0, sleep=sleeps.append)


@pytest.fixture
def wait_logger() -> py_logging.Logger:
    logger = py_logging.getLogger("tests.waitloop")
    logger.setLevel(py_logging.DEBUG)
    return logger
