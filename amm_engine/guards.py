"""Call-safety guards: one engine-wide reentrancy lock and deadline checks."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager

import structlog

from amm_engine.errors import NoReentrancy, TransactionExpired

logger = structlog.get_logger()

Clock = Callable[[], int]


def system_clock() -> int:
    """Current unix time in whole seconds."""
    return int(time.time())


class ReentrancyGuard:
    """Single critical section shared by every mutating engine operation.

    States FREE -> LOCKED -> FREE. A call that re-enters from the thread
    already holding the guard (e.g. from a token hook or an event subscriber)
    fails with NoReentrancy. Calls from other threads wait until it is free,
    so operations on unrelated pairs are serialized too.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._owner: int | None = None

    @property
    def locked(self) -> bool:
        return self._owner is not None

    @contextmanager
    def hold(self, operation: str = "call") -> Iterator[None]:
        """Hold the guard for the duration of the ``with`` block.

        Released on every exit path, including exceptions.

        Raises:
            NoReentrancy: If the current thread already holds the guard
        """
        me = threading.get_ident()
        if self._owner == me:
            logger.warning("reentrant_call_rejected", operation=operation)
            raise NoReentrancy(operation)

        self._lock.acquire()
        self._owner = me
        try:
            yield
        finally:
            self._owner = None
            self._lock.release()


class DeadlineGuard:
    """Rejects calls whose deadline lies before the ambient time."""

    def __init__(self, clock: Clock = system_clock) -> None:
        self._clock = clock

    def now(self) -> int:
        return self._clock()

    def check(self, deadline: int) -> None:
        """Raise TransactionExpired if the clock is past ``deadline``.

        A deadline equal to the current time is still valid.
        """
        now = self._clock()
        if now > deadline:
            logger.warning("transaction_expired", deadline=deadline, now=now)
            raise TransactionExpired(f"deadline {deadline} < now {now}")


__all__ = ["Clock", "system_clock", "ReentrancyGuard", "DeadlineGuard"]
