"""
Connection manager.

Owns the lifecycle of a backend's outbound/inbound channel pair. A
connection is either fully open (output, plus input when the backend has
feedback) or fully closed; a failed connect never leaves one channel open.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from cuebridge_core.errors import ChannelFailure, CueBridgeError, NotConnected

from .feedback import FeedbackListener
from .ledger import PendingLedger
from .protocols import ControlBackend

logger = logging.getLogger(__name__)


@dataclass
class ConnectionResult:
    """Outcome of connect()."""

    already_connected: bool
    output: str | None = None
    input: str | None = None
    feedback: bool = False

    def describe(self, kind: str) -> str:
        if self.already_connected:
            return f"Already connected ({kind})"
        lines = [f"Connected ({kind})", f"Output: {self.output}"]
        if self.input:
            lines.append(f"Input: {self.input}")
        lines.append(f"Feedback monitoring: {'enabled' if self.feedback else 'disabled'}")
        return "\n".join(lines)


class ConnectionManager:
    """
    Connect/disconnect/status for one backend.

    Example:
        >>> manager = ConnectionManager(backend, ledger, listener)
        >>> await manager.connect()
        >>> manager.require_connected()
        >>> manager.disconnect()
    """

    def __init__(
        self,
        backend: ControlBackend,
        ledger: PendingLedger,
        listener: FeedbackListener,
    ) -> None:
        self._backend = backend
        self._ledger = ledger
        self._listener = listener
        self._connected = False
        self._output: str | None = None
        self._input: str | None = None
        self._lock = asyncio.Lock()
        self._generation = 0

    @property
    def backend(self) -> ControlBackend:
        return self._backend

    @property
    def is_connected(self) -> bool:
        return self._connected

    async def connect(self) -> ConnectionResult:
        """
        Open the outbound channel, then the inbound one if supported.

        Idempotent: returns already_connected=True when nothing was done.
        Concurrent callers are serialized; a caller that waited on another
        connect sees its result as already_connected.

        Raises:
            ChannelFailure: A channel could not be acquired (state rolled back)
            RemoteUnreachable: The target application is not reachable
        """
        async with self._lock:
            if self._connected:
                return ConnectionResult(
                    already_connected=True,
                    output=self._output,
                    input=self._input,
                    feedback=self._input is not None,
                )

            generation = self._generation
            try:
                output = await self._backend.open_output()
                input_name = None
                if self._backend.has_feedback:
                    input_name = await self._backend.open_input(self._listener)
            except CueBridgeError as e:
                logger.error(f"Connect failed ({self._backend.kind}): {e}")
                self._release()
                raise
            except Exception as e:
                logger.error(f"Connect failed ({self._backend.kind}): {e}", exc_info=True)
                self._release()
                raise ChannelFailure(f"Connect failed: {e}") from e

            if generation != self._generation:
                # disconnect() ran while channels were opening
                self._release()
                raise ChannelFailure("Connect interrupted by disconnect")

            self._connected = True
            self._output = output
            self._input = input_name
            logger.info(f"Connected via {self._backend.kind}: output={output} input={input_name}")
            return ConnectionResult(
                already_connected=False,
                output=output,
                input=input_name,
                feedback=input_name is not None,
            )

    def disconnect(self) -> bool:
        """
        Cancel every pending acknowledgment and release both channels.

        Safe when never connected. A failure closing one channel never
        prevents closing the other.

        Returns:
            True if a connection was torn down
        """
        was_connected = self._connected
        self._generation += 1
        self._ledger.cancel_all()
        self._release()
        self._connected = False
        self._output = None
        self._input = None
        if was_connected:
            logger.info(f"Disconnected ({self._backend.kind})")
        return was_connected

    def require_connected(self) -> None:
        """Raises NotConnected unless connect() has succeeded."""
        if not self._connected:
            raise NotConnected("Not connected. Use the connect tool first.")

    def status(self) -> dict[str, Any]:
        return {
            "connected": self._connected,
            "backend": self._backend.kind,
            "output": self._output,
            "input": self._input,
            "feedback": self._input is not None,
            "pending": len(self._ledger),
            "details": self._backend.info(),
        }

    def _release(self) -> None:
        for close in (self._backend.close_output, self._backend.close_input):
            try:
                close()
            except Exception as e:
                logger.error(f"Error closing {self._backend.kind} channel: {e}")
