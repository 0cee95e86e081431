"""Run a single call under a deadline.

Two mechanisms are available:

``signal``
    Arms ``ITIMER_REAL`` and raises from the ``SIGALRM`` handler, unwinding the
    running operation at the next bytecode boundary. Only usable on POSIX, from
    the main thread, and when no other real-time interval timer is armed.
    Blocking C calls that never return to the interpreter are not interrupted
    until they do.

``thread``
    Runs the operation in a daemon thread. At the deadline the same private
    exception is injected into the worker with ``PyThreadState_SetAsyncExc``
    and the caller waits up to ``INTERRUPT_GRACE_SECONDS`` for it to unwind, so
    the next attempt never overlaps the expired one. The exception is only
    delivered when the worker runs bytecode: a worker blocked inside one long C
    call (a single long ``time.sleep``, blocking socket I/O) finishes that call
    first, and one still blocked after the grace period is left behind as a
    daemon that never keeps the process alive.

``auto`` picks ``signal`` whenever it is usable and ``thread`` otherwise.
"""

from __future__ import annotations

import ctypes
import logging as py_logging
import signal
import threading
from collections.abc import Callable
from typing import Literal, TypeVar

from waitloop.errors import ConfigurationError, TimeoutExpired

T = TypeVar("T")

TimeoutMode = Literal["auto", "signal", "thread"]
TIMEOUT_MODES: tuple[str, ...] = ("auto", "signal", "thread")
INTERRUPT_GRACE_SECONDS = 1.0

logger = py_logging.getLogger(__name__)


class _Expired(BaseException):
    """Raised inside the operation; a BaseException so ``except Exception`` cannot absorb it."""


def signal_timeout_available() -> bool:
    if not hasattr(signal, "setitimer") or not hasattr(signal, "SIGALRM"):
        return False
    if threading.current_thread() is not threading.main_thread():
        return False
    remaining, _ = signal.getitimer(signal.ITIMER_REAL)
    return remaining == 0


def _expired_error(seconds: float) -> TimeoutExpired:
    return TimeoutExpired(f"execution expired after {seconds}s", timeout=seconds)


def _call_with_signal(operation: Callable[..., T], seconds: float, args: tuple[object, ...]) -> T:
    def _on_alarm(signum: int, frame: object) -> None:
        raise _Expired

    previous = signal.signal(signal.SIGALRM, _on_alarm)
    try:
        signal.setitimer(signal.ITIMER_REAL, seconds)
        try:
            return operation(*args)
        finally:
            signal.setitimer(signal.ITIMER_REAL, 0)
    except _Expired:
        raise _expired_error(seconds) from None
    finally:
        signal.signal(signal.SIGALRM, previous if previous is not None else signal.SIG_DFL)


def _interrupt(worker: threading.Thread) -> None:
    if worker.ident is None:
        return
    affected = ctypes.pythonapi.PyThreadState_SetAsyncExc(
        ctypes.c_ulong(worker.ident),
        ctypes.py_object(_Expired),
    )
    if affected > 1:
        ctypes.pythonapi.PyThreadState_SetAsyncExc(ctypes.c_ulong(worker.ident), None)


def _call_in_thread(operation: Callable[..., T], seconds: float, args: tuple[object, ...]) -> T:
    outcome: dict[str, object] = {}

    def _target() -> None:
        try:
            outcome["value"] = operation(*args)
        except BaseException as exc:
            outcome["error"] = exc

    worker = threading.Thread(target=_target, name="waitloop-attempt", daemon=True)
    worker.start()
    worker.join(seconds)
    if worker.is_alive():
        _interrupt(worker)
        worker.join(INTERRUPT_GRACE_SECONDS)
        if worker.is_alive():
            logger.warning(
                "Attempt thread still blocked %ss after its %ss timeout; leaving it behind",
                INTERRUPT_GRACE_SECONDS,
                seconds,
            )
        raise _expired_error(seconds)
    if "error" in outcome:
        raise outcome["error"]  # type: ignore[misc]
    return outcome["value"]  # type: ignore[return-value]


def call_with_timeout(
    operation: Callable[..., T],
    seconds: float | None,
    *args: object,
    mode: TimeoutMode = "auto",
) -> T:
    if seconds is None:
        return operation(*args)
    if mode not in TIMEOUT_MODES:
        raise ConfigurationError(
            f"invalid timeout mode: {mode!r}",
            hint=f"Use one of: {', '.join(TIMEOUT_MODES)}.",
        )
    if mode == "signal" and not signal_timeout_available():
        raise ConfigurationError(
            "signal based timeouts are not available here",
            hint="Call from the main thread on a POSIX platform or use the thread mode.",
        )
    if mode == "signal" or (mode == "auto" and signal_timeout_available()):
        return _call_with_signal(operation, seconds, args)
    return _call_in_thread(operation, seconds, args)
