"""Result validity predicates."""

from __future__ import annotations

from collections.abc import Callable


class TruthyTester:
    """Accepts everything except ``None`` and ``False``.

    Zero, empty strings and empty containers count as results.
    """

    def is_valid(self, result: object) -> bool:
        return result is not None and result is not False


class PredicateTester:
    def __init__(self, predicate: Callable[[object], object]) -> None:
        self.predicate = predicate

    def is_valid(self, result: object) -> bool:
        return bool(self.predicate(result))
