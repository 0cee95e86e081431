"""Failure taxonomy and exit code contract."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    INVALID_ARGS = 2
    CONFIG_ERROR = 3
    RUNTIME_ERROR = 4
    TIMEOUT_EXPIRED = 5
    NO_RESULT = 6


@dataclass
class WaitError(Exception):
    message: str
    code: ExitCode = ExitCode.RUNTIME_ERROR
    hint: str = ""

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message} Hint: {self.hint}"
        return self.message


@dataclass
class ConfigurationError(WaitError):
    """Invalid construction arguments; never retried."""

    code: ExitCode = ExitCode.CONFIG_ERROR


@dataclass
class TimeoutExpired(WaitError):
    """An attempt did not finish within the per-attempt timeout."""

    code: ExitCode = ExitCode.TIMEOUT_EXPIRED
    timeout: float | None = None


@dataclass
class ResultInvalid(WaitError):
    """An attempt finished but its result failed the validity test."""

    code: ExitCode = ExitCode.NO_RESULT
    result: object = None


def user_facing_error(message: str, *, hint: str = "") -> str:
    if hint:
        return f"Error: {message}. Next step: {hint}"
    return f"Error: {message}."
