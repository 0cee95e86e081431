"""One narrow protocol per retry capability."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class AttemptCounter(Protocol):
    @property
    def attempt(self) -> int: ...

    def reset(self) -> None: ...

    def increment(self) -> None: ...

    def is_last_attempt(self) -> bool: ...


@runtime_checkable
class DelayStrategy(Protocol):
    def sleep(self) -> None: ...


@runtime_checkable
class ResultTester(Protocol):
    def is_valid(self, result: object) -> bool: ...


@runtime_checkable
class RescueStrategy(Protocol):
    def exceptions(self) -> tuple[type[BaseException], ...]: ...

    def log(self, failure: BaseException) -> None: ...


@runtime_checkable
class RaiseStrategy(Protocol):
    def should_raise(self, failure: BaseException) -> bool: ...
