"""MIDI Machine Control (MMC) constants.

MMC commands are universal real-time System Exclusive messages:

    F0 7F <device> 06 <command> F7

The bridge always addresses device 0x7F (all devices).
"""

from __future__ import annotations

from typing import Final

SYSEX_START: Final[int] = 0xF0
SYSEX_END: Final[int] = 0xF7
UNIVERSAL_REALTIME: Final[int] = 0x7F
ALL_DEVICES: Final[int] = 0x7F
MMC_COMMAND: Final[int] = 0x06

# Prefix shared by every outbound MMC command frame
MMC_PREFIX: Final[tuple[int, ...]] = (SYSEX_START, UNIVERSAL_REALTIME, ALL_DEVICES, MMC_COMMAND)

# Transport verbs -> MMC command byte
MMC_COMMANDS: Final[dict[str, int]] = {
    "stop": 0x01,
    "play": 0x02,
    "deferred_play": 0x03,
    "forward": 0x04,
    "rewind": 0x05,
    "record": 0x06,  # Record Strobe (punch in)
    "record_exit": 0x07,  # Punch out
    "record_pause": 0x08,
    "pause": 0x09,
    "eject": 0x0A,
    "chase": 0x0B,
    "reset": 0x0D,
    "write": 0x40,  # Record ready / arm tracks
    "shuttle": 0x47,
}

GOTO_VERB: Final[str] = "goto"

# Goto/Locate: F0 7F 7F 06 44 06 01 hh mm ss ff sf F7
MMC_LOCATE: Final[int] = 0x44
LOCATE_INFO_LENGTH: Final[int] = 0x06
LOCATE_TARGET: Final[int] = 0x01

# Acknowledgment pattern on the inbound port. None matches any byte.
MMC_ACK_PATTERN: Final[tuple[int | None, ...]] = (
    SYSEX_START,
    UNIVERSAL_REALTIME,
    None,
    None,
    0x0F,
)


def transport_verbs() -> list[str]:
    """All transport verbs, including goto"""
    return [*MMC_COMMANDS, GOTO_VERB]


def matches_ack_pattern(data: tuple[int, ...] | list[int]) -> bool:
    """
    Check whether raw MIDI bytes start with the MMC acknowledgment prefix.

    Args:
        data: Complete MIDI message bytes, including F0

    Returns:
        True if the first five bytes match MMC_ACK_PATTERN
    """
    if len(data) < len(MMC_ACK_PATTERN):
        return False
    return all(
        expected is None or byte == expected
        for expected, byte in zip(MMC_ACK_PATTERN, data)
    )
