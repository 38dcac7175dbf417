"""
Timer protocol.

The pending-operation ledger and the grace-period wait go through this
interface so tests can drive elapsed time with a manual clock instead of
real delays.

Implementations:
    - AsyncioTimer: the running event loop
    - ManualTimer: test double (tests/cuebridge_link/mocks.py)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable


@runtime_checkable
class TimerHandle(Protocol):
    """Cancellable scheduled callback."""

    def cancel(self) -> None:
        ...


@runtime_checkable
class Timer(Protocol):
    """Clock plus one-shot callback scheduling, all in seconds."""

    def now(self) -> float:
        """Monotonic time in seconds."""
        ...

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run callback once after delay seconds."""
        ...

    async def sleep(self, delay: float) -> None:
        """Suspend the caller without blocking other tasks."""
        ...
