"""
Wire messages: backend-specific encoded payloads.

Design principles:
- frozen=True, slots=True (immutable, cheap)
- Values are final; backends transmit them as-is
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from .constants.midi import CHANNEL_MASK, STATUS_CONTROL_CHANGE, STATUS_MASK
from .constants.mmc import SYSEX_END, SYSEX_START


@dataclass(frozen=True, slots=True)
class MidiMessage:
    """
    Raw MIDI bytes.

    Example:
        >>> MidiMessage((0xF0, 0x7F, 0x7F, 0x06, 0x02, 0xF7)).is_sysex
        True
    """

    data: tuple[int, ...]

    @classmethod
    def control_change(cls, channel: int, control: int, value: int) -> MidiMessage:
        """Build a Control Change message [0xB0 + channel, control, value]."""
        return cls((STATUS_CONTROL_CHANGE | (channel & CHANNEL_MASK), control & 0x7F, value & 0x7F))

    @property
    def is_sysex(self) -> bool:
        return bool(self.data) and self.data[0] == SYSEX_START and self.data[-1] == SYSEX_END

    @property
    def is_control_change(self) -> bool:
        return len(self.data) == 3 and (self.data[0] & STATUS_MASK) == STATUS_CONTROL_CHANGE

    @property
    def channel(self) -> int | None:
        """Channel 0-15 for channel messages, None for system messages"""
        if not self.data or self.data[0] >= 0xF0:
            return None
        return self.data[0] & CHANNEL_MASK

    def hex(self) -> str:
        return " ".join(f"{b:02X}" for b in self.data)

    def __str__(self) -> str:
        return f"[{self.hex()}]"


@dataclass(frozen=True, slots=True)
class OscMessage:
    """OSC address with typed arguments."""

    address: str
    args: tuple[Any, ...] = ()

    def __str__(self) -> str:
        return f"{self.address} {list(self.args)}"


@dataclass(frozen=True, slots=True)
class ScriptMessage:
    """AppleScript source to run with osascript."""

    source: str

    def __str__(self) -> str:
        return self.source


WireMessage = Union[MidiMessage, OscMessage, ScriptMessage]
