"""Attempt counting against a fixed maximum."""

from __future__ import annotations

import logging as py_logging

from waitloop.errors import ConfigurationError

DEFAULT_ATTEMPTS = 5


def validate_attempts(value: object) -> int:
    # bool is an int subclass.
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigurationError(
            f"invalid number of attempts: {value!r}",
            hint="attempts must be a positive whole number.",
        )
    return value


class Counter:
    def __init__(
        self,
        maximum: int = DEFAULT_ATTEMPTS,
        *,
        logger: py_logging.Logger | None = None,
    ) -> None:
        self.maximum = validate_attempts(maximum)
        self.logger = logger or py_logging.getLogger(__name__)
        self._current = 0

    @property
    def attempt(self) -> int:
        return self._current

    def reset(self) -> None:
        self._current = 0

    def increment(self) -> None:
        self._current += 1
        self.logger.debug("attempt %s", str(self))

    def is_last_attempt(self) -> bool:
        return self._current == self.maximum

    def __str__(self) -> str:
        return f"{self._current}/{self.maximum}"

    def __repr__(self) -> str:
        return f"Counter(attempt={self._current}, maximum={self.maximum})"
