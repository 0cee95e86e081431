"""Retryable failure kinds and how rescued failures are reported."""

from __future__ import annotations

import logging as py_logging
import traceback
from collections.abc import Iterable

from waitloop.errors import ConfigurationError, ResultInvalid, TimeoutExpired

BUILTIN_RESCUES: tuple[type[BaseException], ...] = (TimeoutExpired, ResultInvalid)

RescueSpec = type[BaseException] | Iterable[type[BaseException]] | None


def _is_exception_class(value: object) -> bool:
    return isinstance(value, type) and issubclass(value, BaseException)


def normalize_kinds(kinds: RescueSpec) -> tuple[type[BaseException], ...]:
    """Accept nothing, a single exception class, or an iterable of them."""
    if kinds is None:
        return ()
    if _is_exception_class(kinds):
        return (kinds,)  # type: ignore[return-value]
    try:
        candidates = list(kinds)  # type: ignore[arg-type]
    except TypeError as exc:
        raise ConfigurationError(
            f"invalid rescue: {kinds!r}",
            hint="Pass an exception class or a list of exception classes.",
        ) from exc

    normalized: list[type[BaseException]] = []
    for candidate in candidates:
        if not _is_exception_class(candidate):
            raise ConfigurationError(
                f"invalid rescue entry: {candidate!r}",
                hint="Every rescue entry must be an exception class.",
            )
        if candidate not in normalized:
            normalized.append(candidate)
    return tuple(normalized)


class Rescuer:
    def __init__(
        self,
        rescue: RescueSpec = None,
        *,
        logger: py_logging.Logger | None = None,
    ) -> None:
        self._rescue = normalize_kinds(rescue)
        self.logger = logger or py_logging.getLogger(__name__)

    @property
    def rescue(self) -> tuple[type[BaseException], ...]:
        return self._rescue

    def exceptions(self) -> tuple[type[BaseException], ...]:
        combined = list(BUILTIN_RESCUES)
        combined.extend(kind for kind in self._rescue if kind not in combined)
        return tuple(combined)

    def log(self, failure: BaseException) -> None:
        self.logger.debug(
            "Rescued exception while waiting: %s: %s",
            type(failure).__name__,
            failure,
        )
        if self.logger.isEnabledFor(py_logging.DEBUG):
            self.logger.debug(
                "".join(traceback.format_exception(type(failure), failure, failure.__traceback__)).rstrip()
            )
