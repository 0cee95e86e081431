"""The retry loop: run an operation until it yields a valid result."""

from __future__ import annotations

import functools
import inspect
import logging as py_logging
from collections.abc import Callable
from typing import Any, TypeVar

from waitloop.config import DEFAULT_TIMEOUT, WaitOptions, build_options
from waitloop.errors import ConfigurationError, ResultInvalid
from waitloop.logging import create_logger
from waitloop.strategies import (
    DEFAULT_ATTEMPTS,
    DEFAULT_DELAY,
    AttemptCounter,
    Counter,
    DelayStrategy,
    ExponentialDelayer,
    NeverRaiser,
    RaiseStrategy,
    RegularDelayer,
    RescueStrategy,
    Rescuer,
    ResultTester,
    TruthyTester,
)
from waitloop.strategies.rescuer import RescueSpec
from waitloop.timeouts import TimeoutMode, call_with_timeout, signal_timeout_available

T = TypeVar("T")


def accepts_attempt(operation: Callable[..., object]) -> bool:
    """Whether ``operation`` can be called with the attempt number."""
    try:
        signature = inspect.signature(operation)
    except (TypeError, ValueError):
        return False
    try:
        signature.bind(1)
    except TypeError:
        return False
    return True


def _require(strategy: object, protocol: type, name: str, *methods: str) -> None:
    capable = all(callable(getattr(strategy, method, None)) for method in methods)
    if not (capable and isinstance(strategy, protocol)):
        capability = ", ".join(methods)
        raise ConfigurationError(f"{name} strategy does not respond to {capability}: {strategy!r}")


class Wait:
    """Blocks until an operation produces a valid result.

    Each call to :meth:`until` runs the operation up to ``attempts`` times,
    each run bounded by ``timeout`` seconds. ``None`` and ``False`` results,
    timeouts and exceptions listed in ``rescue`` are retried after a pause from
    the delayer; anything else propagates at once. When attempts run out the
    failure from the last attempt is raised.

    Example::

        wait = Wait(attempts=3, rescue=ConnectionError)
        wait.until(lambda attempt: fetch_status() == "ready" or None)

    Every strategy can be replaced (``counter``, ``delayer``, ``tester``,
    ``rescuer``, ``raiser``). Strategies built here share the instance logger,
    which defaults to a fresh stdout logger at DEBUG level when ``debug`` is set
    and WARN otherwise.

    A Wait is reusable but not safe for concurrent ``until`` calls.
    """

    def __init__(
        self,
        attempts: int = DEFAULT_ATTEMPTS,
        timeout: float | None = DEFAULT_TIMEOUT,
        delay: float = DEFAULT_DELAY,
        rescue: RescueSpec = None,
        *,
        counter: AttemptCounter | None = None,
        delayer: DelayStrategy | None = None,
        tester: ResultTester | None = None,
        rescuer: RescueStrategy | None = None,
        raiser: RaiseStrategy | None = None,
        exponential: bool = False,
        timeout_mode: TimeoutMode = "auto",
        debug: bool = False,
        logger: py_logging.Logger | None = None,
    ) -> None:
        options = build_options(
            attempts=attempts,
            timeout=timeout,
            delay=delay,
            exponential=exponential,
            timeout_mode=timeout_mode,
            debug=debug,
        )
        self.options = options
        self.timeout = options.timeout
        self.timeout_mode: TimeoutMode = options.timeout_mode
        self.logger = logger or create_logger(options.debug)

        if delayer is None:
            delayer_class = ExponentialDelayer if options.exponential else RegularDelayer
            delayer = delayer_class(options.delay)

        self.counter = counter if counter is not None else Counter(options.attempts, logger=self.logger)
        self.delayer = delayer
        self.tester = tester if tester is not None else TruthyTester()
        self.rescuer = rescuer if rescuer is not None else Rescuer(rescue, logger=self.logger)
        self.raiser = raiser if raiser is not None else NeverRaiser()

        _require(self.counter, AttemptCounter, "counter", "reset", "increment", "is_last_attempt")
        _require(self.delayer, DelayStrategy, "delay", "sleep")
        _require(self.tester, ResultTester, "tester", "is_valid")
        _require(self.rescuer, RescueStrategy, "rescue", "exceptions", "log")
        _require(self.raiser, RaiseStrategy, "raise", "should_raise")

    @classmethod
    def from_options(cls, options: WaitOptions, **kwargs: Any) -> Wait:
        return cls(
            attempts=options.attempts,
            timeout=options.timeout,
            delay=options.delay,
            exponential=options.exponential,
            timeout_mode=options.timeout_mode,
            debug=options.debug,
            **kwargs,
        )

    def until(self, operation: Callable[..., T]) -> T:
        """Run ``operation`` until it returns a valid result.

        ``operation`` receives the 1-based attempt number when it accepts a
        positional argument.

        Returns:
            The first valid result.

        Raises:
            The failure of the last attempt, a failure the raiser escalated,
            or any exception outside the rescue set on first occurrence.
        """
        if self.timeout is not None and self.timeout_mode == "signal" and not signal_timeout_available():
            raise ConfigurationError(
                "signal based timeouts are not available here",
                hint="Call from the main thread on a POSIX platform or use the thread mode.",
            )

        pass_attempt = accepts_attempt(operation)
        catchable = self.rescuer.exceptions()

        self.counter.reset()
        while True:
            self.counter.increment()
            args = (self.counter.attempt,) if pass_attempt else ()
            try:
                result = call_with_timeout(operation, self.timeout, *args, mode=self.timeout_mode)
                if not self.tester.is_valid(result):
                    raise ResultInvalid(f"result was {result!r}", result=result)
            except catchable as exc:
                self.rescuer.log(exc)
                if self.raiser.should_raise(exc):
                    self.logger.debug("Attempt %s failed, escalating %s", str(self.counter), type(exc).__name__)
                    raise
                if self.counter.is_last_attempt():
                    raise
                self.logger.debug("Attempt %s failed, delaying for %s", str(self.counter), str(self.delayer))
                self.delayer.sleep()
            else:
                return result

    def wrap(self, function: Callable[..., T]) -> Callable[..., T]:
        """Decorate ``function`` so each call waits for a valid result."""

        @functools.wraps(function)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            return self.until(lambda: function(*args, **kwargs))

        return wrapper
