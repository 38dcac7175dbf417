"""MIDI channel-message constants for cuebridge.

Controller numbers used by the default mixer mapping.
"""

from __future__ import annotations

from typing import Final

# Channel voice status nibbles
STATUS_CONTROL_CHANGE: Final[int] = 0xB0
STATUS_MASK: Final[int] = 0xF0
CHANNEL_MASK: Final[int] = 0x0F

MAX_CHANNEL: Final[int] = 15
MAX_DATA: Final[int] = 127

# Standard MIDI CC numbers
CC_BANK_SELECT: Final[int] = 0
CC_VOLUME: Final[int] = 7
CC_PAN: Final[int] = 10

# Per-track controller ranges on the global channel (base + track - 1)
CC_MUTE_BASE: Final[int] = 16
CC_SOLO_BASE: Final[int] = 32
CC_SEND1_BASE: Final[int] = 48
CC_SEND2_BASE: Final[int] = 64

GLOBAL_CHANNEL: Final[int] = 0

MAX_TRACKS: Final[int] = 32

# Parameters carried as on/off switches
SWITCH_PARAMETERS: Final[frozenset[str]] = frozenset({"mute", "solo"})


def track_channel(track: int) -> int:
    """
    Per-track MIDI channel for channel-strip controllers.

    Args:
        track: 1-based track number

    Returns:
        Channel 0-15 (tracks past 16 share channel 15)
    """
    return max(0, min(MAX_CHANNEL, track - 1))


def cc_correlation_key(channel: int, control: int) -> str:
    """Correlation key for a Control Change echo"""
    return f"cc_{channel}_{control}"
