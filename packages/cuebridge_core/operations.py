"""
Operations: the abstract actions a caller can ask the DAW to perform.

Operations are immutable and constructed per call. They carry already
validated arguments; encoders turn them into backend wire messages.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class TransportOperation:
    """
    Transport command (play, stop, goto, ...).

    Example:
        >>> TransportOperation("play")
        >>> TransportOperation("goto", position=3661.0)
    """

    verb: str
    position: float | None = None  # seconds, goto only

    @property
    def name(self) -> str:
        return f"transport.{self.verb}"


@dataclass(frozen=True, slots=True)
class MixerOperation:
    """Set a channel-strip parameter on a 1-based track."""

    track: int
    parameter: str  # volume | pan | mute | solo | send1 | send2
    value: float | bool

    @property
    def name(self) -> str:
        return "mixer.set"


@dataclass(frozen=True, slots=True)
class TrackSelectOperation:
    """Select a 1-based track."""

    number: int

    @property
    def name(self) -> str:
        return "track.select"


Operation = Union[TransportOperation, MixerOperation, TrackSelectOperation]
