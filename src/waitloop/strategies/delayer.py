"""Pauses between attempts."""

from __future__ import annotations

import math
import time
from collections.abc import Callable

from waitloop.errors import ConfigurationError

DEFAULT_DELAY = 1.0


class RegularDelayer:
    """Sleeps for the same duration before every retry."""

    def __init__(
        self,
        delay: float = DEFAULT_DELAY,
        *,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        numeric = isinstance(delay, (int, float)) and not isinstance(delay, bool)
        if not numeric or not math.isfinite(delay) or delay < 0:
            raise ConfigurationError(
                f"invalid delay: {delay!r}",
                hint="delay must be a finite, non-negative number of seconds.",
            )
        self._delay = float(delay)
        self._sleep = sleep

    @property
    def delay(self) -> float:
        return self._delay

    def sleep(self) -> None:
        self._sleep(self._delay)

    def __str__(self) -> str:
        return f"{self._delay}s"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(delay={self._delay})"


class ExponentialDelayer(RegularDelayer):
    """Doubles the delay after every sleep."""

    def sleep(self) -> None:
        super().sleep()
        self._increment()

    def _increment(self) -> None:
        self._delay *= 2
