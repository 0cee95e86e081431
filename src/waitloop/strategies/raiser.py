"""Escalation policies evaluated after a rescued failure is logged."""

from __future__ import annotations

from waitloop.strategies.rescuer import normalize_kinds


class NeverRaiser:
    def should_raise(self, failure: BaseException) -> bool:
        return False


class KindRaiser:
    """Aborts immediately on the given failure kinds, even with attempts left.

    Useful to fail fast on a permanent error that shares a base class with
    transient ones in the rescue set::

        Wait(rescue=OSError, raiser=KindRaiser(PermissionError))
    """

    def __init__(self, *kinds: type[BaseException]) -> None:
        self.kinds = normalize_kinds(kinds)

    def should_raise(self, failure: BaseException) -> bool:
        return bool(self.kinds) and isinstance(failure, self.kinds)
