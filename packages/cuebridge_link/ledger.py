"""
Pending-operation ledger.

Tracks outbound commands that are waiting for the DAW to echo them back.
Each correlation key holds at most one entry, which moves through

    PENDING -> RESOLVED   (feedback arrived)
    PENDING -> EXPIRED    (timeout fired first)
    PENDING -> SUPERSEDED (a newer command reused the key)
    PENDING -> CANCELLED  (disconnect)

and is removed from the ledger on every transition out of PENDING. The
timeout is always cancelled before an entry leaves the ledger by any path
other than expiry, so a stale timeout never fires against a newer entry.

All mutations happen on the event loop thread; inbound feedback from other
threads must be marshalled with call_soon_threadsafe before reaching here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .protocols.timer import Timer, TimerHandle
from .timers import AsyncioTimer

logger = logging.getLogger(__name__)


class OperationState(Enum):
    """Lifecycle of a pending operation"""
    PENDING = "pending"
    RESOLVED = "resolved"
    EXPIRED = "expired"
    SUPERSEDED = "superseded"
    CANCELLED = "cancelled"


@dataclass
class PendingOperation:
    """An outbound command awaiting acknowledgment."""
    key: str
    issued_at: float
    timeout_ms: float
    context: dict[str, Any] = field(default_factory=dict)
    handle: TimerHandle | None = None
    state: OperationState = OperationState.PENDING

    def describe(self) -> str:
        """One-line description of the command for logs"""
        if not self.context:
            return self.key
        details = " ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{self.key} ({details})"

    def _finish(self, state: OperationState) -> None:
        if self.handle is not None and state is not OperationState.EXPIRED:
            self.handle.cancel()
        self.handle = None
        self.state = state


class PendingLedger:
    """
    Map of correlation key -> PendingOperation with timeout expiry.

    Example:
        >>> ledger = PendingLedger(timer)
        >>> ledger.register("transport", {"action": "play"})
        >>> ledger.resolve("transport")
        True
    """

    DEFAULT_TIMEOUT_MS: float = 3000.0

    def __init__(
        self,
        timer: Timer | None = None,
        default_timeout_ms: float = DEFAULT_TIMEOUT_MS,
    ) -> None:
        self._timer: Timer = timer if timer is not None else AsyncioTimer()
        self._default_timeout_ms = default_timeout_ms
        self._pending: dict[str, PendingOperation] = {}

        # Outcome counters (reported by feedback_status)
        self._stats: dict[str, int] = {
            "registered": 0,
            "resolved": 0,
            "expired": 0,
            "superseded": 0,
            "cancelled": 0,
        }

    @property
    def default_timeout_ms(self) -> float:
        return self._default_timeout_ms

    @property
    def stats(self) -> dict[str, int]:
        return dict(self._stats)

    def __contains__(self, key: object) -> bool:
        return key in self._pending

    def __len__(self) -> int:
        return len(self._pending)

    def get(self, key: str) -> PendingOperation | None:
        return self._pending.get(key)

    def register(
        self,
        key: str,
        context: dict[str, Any] | None = None,
        timeout_ms: float | None = None,
    ) -> PendingOperation:
        """
        Start tracking an outbound command.

        An existing entry under the same key is superseded: its timeout is
        cancelled before the new one is scheduled.

        Args:
            key: Correlation key ("transport", "cc_0_16", ...)
            context: Descriptive metadata (action, track, parameter, value)
            timeout_ms: Expiry in milliseconds (default 3000)

        Returns:
            The new PendingOperation
        """
        timeout = self._default_timeout_ms if timeout_ms is None else timeout_ms

        previous = self._pending.pop(key, None)
        if previous is not None:
            previous._finish(OperationState.SUPERSEDED)
            self._stats["superseded"] += 1
            logger.debug(f"Superseded pending {previous.describe()}")

        entry = PendingOperation(
            key=key,
            issued_at=self._timer.now(),
            timeout_ms=timeout,
            context=dict(context or {}),
        )
        entry.handle = self._timer.call_later(timeout / 1000.0, lambda: self._expire(entry))
        self._pending[key] = entry
        self._stats["registered"] += 1
        return entry

    def resolve(self, key: str, detail: str | None = None) -> bool:
        """
        Acknowledge a pending command.

        Args:
            key: Correlation key derived from the feedback message
            detail: Diagnostic text about the received feedback

        Returns:
            True if an entry was pending under key
        """
        entry = self._pending.pop(key, None)
        if entry is None:
            return False

        entry._finish(OperationState.RESOLVED)
        self._stats["resolved"] += 1
        elapsed = self.elapsed_ms(entry)
        suffix = f": {detail}" if detail else ""
        logger.info(f"Feedback confirmed {entry.describe()} after {elapsed:.0f} ms{suffix}")
        return True

    def discard(self, key: str) -> None:
        """Drop an entry whose command never went out (send failed)."""
        entry = self._pending.pop(key, None)
        if entry is not None:
            entry._finish(OperationState.CANCELLED)
            self._stats["registered"] -= 1

    def cancel_all(self) -> int:
        """
        Cancel every pending timeout and clear the ledger.

        Returns:
            Number of entries cancelled
        """
        entries = list(self._pending.values())
        self._pending.clear()
        for entry in entries:
            entry._finish(OperationState.CANCELLED)
        self._stats["cancelled"] += len(entries)
        if entries:
            logger.info(f"Cancelled {len(entries)} pending operation(s)")
        return len(entries)

    def snapshot(self) -> list[dict[str, Any]]:
        """Pending entries as [{key, elapsed_ms, context}], oldest first."""
        entries = sorted(self._pending.values(), key=lambda e: e.issued_at)
        return [
            {
                "key": entry.key,
                "elapsed_ms": round(self.elapsed_ms(entry)),
                "context": dict(entry.context),
            }
            for entry in entries
        ]

    def elapsed_ms(self, entry: PendingOperation) -> float:
        return (self._timer.now() - entry.issued_at) * 1000.0

    def _expire(self, entry: PendingOperation) -> None:
        """Timeout callback. Ignores entries that already left the ledger."""
        if self._pending.get(entry.key) is not entry:
            return
        del self._pending[entry.key]
        entry._finish(OperationState.EXPIRED)
        self._stats["expired"] += 1
        logger.warning(f"No feedback received for {entry.describe()} within {entry.timeout_ms:.0f} ms")
