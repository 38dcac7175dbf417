"""
Feedback listener.

Parses acknowledgment messages arriving on a backend's inbound channel,
derives their correlation key and resolves it in the ledger. Malformed or
unrecognized feedback is logged and dropped; nothing raised here may reach
the command path.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from cuebridge_core.constants import TRANSPORT_KEY, cc_correlation_key, matches_ack_pattern
from cuebridge_core.constants.midi import STATUS_CONTROL_CHANGE, STATUS_MASK
from cuebridge_core.encoding import osc_correlation_key
from cuebridge_core.profiles import OscProfile

from .ledger import PendingLedger

logger = logging.getLogger(__name__)


class FeedbackListener:
    """Routes inbound MIDI/OSC feedback to the pending-operation ledger."""

    def __init__(self, ledger: PendingLedger, osc_profile: OscProfile | None = None) -> None:
        self._ledger = ledger
        self._osc_profile = osc_profile or OscProfile()
        self._counts: dict[str, int] = {"received": 0, "matched": 0, "ignored": 0}

    @property
    def counts(self) -> dict[str, int]:
        return dict(self._counts)

    # ================================================================
    # MIDI
    # ================================================================

    def on_midi(self, data: Sequence[int]) -> None:
        """Handle one complete inbound MIDI message (raw bytes)."""
        self._counts["received"] += 1
        try:
            self._handle_midi(list(data))
        except Exception as e:
            self._counts["ignored"] += 1
            logger.error(f"Error handling MIDI feedback {list(data)!r}: {e}", exc_info=True)

    def _handle_midi(self, data: list[int]) -> None:
        logger.debug(f"MIDI feedback received: {data}")

        if matches_ack_pattern(data):
            self._resolve(TRANSPORT_KEY, "MMC acknowledgment")
            return

        if len(data) >= 3 and (data[0] & STATUS_MASK) == STATUS_CONTROL_CHANGE:
            channel = data[0] & 0x0F
            control, value = data[1], data[2]
            self._resolve(
                cc_correlation_key(channel, control),
                f"Ch{channel + 1} CC{control} = {value}",
            )
            return

        self._counts["ignored"] += 1
        logger.debug(f"Ignoring unrecognized MIDI feedback: {data}")

    # ================================================================
    # OSC
    # ================================================================

    def on_osc(self, address: str, args: Sequence[Any] = ()) -> None:
        """Handle one inbound OSC message."""
        self._counts["received"] += 1
        try:
            key = osc_correlation_key(address, self._osc_profile)
            self._resolve(key, f"{address} {list(args)}")
        except Exception as e:
            self._counts["ignored"] += 1
            logger.error(f"Error handling OSC feedback {address}: {e}", exc_info=True)

    def _resolve(self, key: str, detail: str) -> None:
        if self._ledger.resolve(key, detail):
            self._counts["matched"] += 1
        else:
            self._counts["ignored"] += 1
            logger.debug(f"Feedback for {key} with nothing pending: {detail}")
