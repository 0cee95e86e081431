"""Retry an operation until it produces a valid result."""

from .config import WaitOptions, load_options
from .errors import ConfigurationError, ExitCode, ResultInvalid, TimeoutExpired, WaitError
from .strategies import (
    Counter,
    ExponentialDelayer,
    KindRaiser,
    NeverRaiser,
    PredicateTester,
    RegularDelayer,
    Rescuer,
    TruthyTester,
)
from .timeouts import call_with_timeout
from .wait import Wait

__all__ = [
    "call_with_timeout",
    "ConfigurationError",
    "Counter",
    "ExitCode",
    "ExponentialDelayer",
    "KindRaiser",
    "load_options",
    "NeverRaiser",
    "PredicateTester",
    "RegularDelayer",
    "Rescuer",
    "ResultInvalid",
    "TimeoutExpired",
    "TruthyTester",
    "Wait",
    "WaitError",
    "WaitOptions",
]
