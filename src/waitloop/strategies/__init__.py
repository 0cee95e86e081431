"""Pluggable strategies driving the wait loop."""

from .counter import DEFAULT_ATTEMPTS, Counter
from .delayer import DEFAULT_DELAY, ExponentialDelayer, RegularDelayer
from .protocols import AttemptCounter, DelayStrategy, RaiseStrategy, RescueStrategy, ResultTester
from .raiser import KindRaiser, NeverRaiser
from .rescuer import BUILTIN_RESCUES, Rescuer
from .tester import PredicateTester, TruthyTester

__all__ = [
    "AttemptCounter",
    "BUILTIN_RESCUES",
    "Counter",
    "DEFAULT_ATTEMPTS",
    "DEFAULT_DELAY",
    "DelayStrategy",
    "ExponentialDelayer",
    "KindRaiser",
    "NeverRaiser",
    "PredicateTester",
    "RaiseStrategy",
    "RegularDelayer",
    "RescueStrategy",
    "Rescuer",
    "ResultTester",
    "TruthyTester",
]
