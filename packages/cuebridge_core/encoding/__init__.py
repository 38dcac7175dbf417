"""
Protocol encoders.

encode() maps an Operation to a wire message for the backend described by
the profile. Encoders are pure functions: no I/O, deterministic output.

correlation_key() names the acknowledgment slot a message occupies, or
None for fire-and-forget messages (goto, AppleScript).
"""

from __future__ import annotations

from ..constants import TRANSPORT_KEY, cc_correlation_key
from ..constants.mmc import MMC_COMMANDS, MMC_PREFIX
from ..operations import Operation
from ..profiles import EncodingProfile, MidiProfile, OscProfile, ScriptProfile
from ..wire import MidiMessage, OscMessage, WireMessage
from . import applescript, midi, osc

_MMC_OPCODES = frozenset(MMC_COMMANDS.values())


def encode(operation: Operation, profile: EncodingProfile) -> WireMessage:
    """
    Encode an operation for a backend.

    Raises:
        UnknownOperation: Verb not supported by the backend
        UnknownParameter: Mixer parameter not supported by the backend
        InvalidArgument: Value cannot be represented on the wire
    """
    if isinstance(profile, MidiProfile):
        return midi.encode(operation, profile)
    if isinstance(profile, OscProfile):
        return osc.encode(operation, profile)
    if isinstance(profile, ScriptProfile):
        return applescript.encode(operation, profile)
    raise TypeError(f"Unsupported encoding profile: {type(profile).__name__}")


def correlation_key(message: WireMessage, profile: EncodingProfile) -> str | None:
    """
    Correlation key under which an acknowledgment for `message` is tracked.

    Example:
        >>> correlation_key(MidiMessage.control_change(0, 16, 127), MidiProfile())
        'cc_0_16'
    """
    if isinstance(message, MidiMessage):
        data = message.data
        if (
            message.is_sysex
            and len(data) == len(MMC_PREFIX) + 2
            and data[: len(MMC_PREFIX)] == MMC_PREFIX
            and data[len(MMC_PREFIX)] in _MMC_OPCODES
        ):
            return TRANSPORT_KEY
        if message.is_control_change:
            return cc_correlation_key(data[0] & 0x0F, data[1])
        return None

    if isinstance(message, OscMessage) and isinstance(profile, OscProfile):
        if message.address == profile.goto_address:
            return None
        return osc_correlation_key(message.address, profile)

    return None


def osc_correlation_key(address: str, profile: OscProfile) -> str:
    """Correlation key for an OSC address (sent or echoed)"""
    if address.startswith(profile.transport_prefix):
        return TRANSPORT_KEY
    return f"osc:{address}"


__all__ = [
    "correlation_key",
    "encode",
    "osc_correlation_key",
]
