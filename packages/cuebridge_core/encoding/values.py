"""Value normalization shared by the encoders."""

from __future__ import annotations

import math

from ..constants.midi import MAX_DATA
from ..errors import InvalidArgument


def switch_on(value: float | bool) -> bool:
    """Truthiness of a switch value (mute/solo)"""
    return bool(value)


def clamp_unit(value: float | bool) -> float:
    """Clamp a continuous value to [0.0, 1.0]"""
    value = float(value)
    if math.isnan(value):
        raise InvalidArgument("value must be a number, got nan")
    return max(0.0, min(1.0, value))


def check_position(position: float | None) -> float:
    """Validate a goto position in seconds; returns it unchanged."""
    if position is None:
        raise InvalidArgument("goto requires a position (seconds)")
    if not math.isfinite(position):
        raise InvalidArgument(f"goto position must be finite, got {position}")
    if position < 0:
        raise InvalidArgument(f"goto position must be >= 0, got {position}")
    return position


def to_midi_value(value: float | bool, switch: bool = False) -> int:
    """
    Scale a parameter value to the MIDI data range.

    Exact halves round up.

    Args:
        value: Normalized value (0.0-1.0) or boolean
        switch: True for on/off parameters (127 / 0)

    Returns:
        Data byte 0-127

    Example:
        >>> to_midi_value(0.5)
        64
        >>> to_midi_value(True, switch=True)
        127
    """
    if switch:
        return MAX_DATA if switch_on(value) else 0
    return math.floor(clamp_unit(value) * MAX_DATA + 0.5)


def to_osc_value(value: float | bool, switch: bool = False) -> float:
    """Scale a parameter value to the OSC float range (0.0-1.0)"""
    if switch:
        return 1.0 if switch_on(value) else 0.0
    return clamp_unit(value)
