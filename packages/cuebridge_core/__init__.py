"""
cuebridge core

Operations, wire messages and pure protocol encoders for driving a DAW's
transport and mixer over MIDI (MMC/CC), OSC or AppleScript.
"""

__version__ = "0.3.0"

from .encoding import correlation_key, encode
from .errors import (
    ChannelFailure,
    CueBridgeError,
    InvalidArgument,
    NotConnected,
    RemoteUnreachable,
    UnknownOperation,
    UnknownParameter,
)
from .operations import MixerOperation, Operation, TrackSelectOperation, TransportOperation
from .profiles import EncodingProfile, MidiProfile, MixerMap, OscProfile, ScriptProfile
from .wire import MidiMessage, OscMessage, ScriptMessage, WireMessage

__all__ = [
    "ChannelFailure",
    "CueBridgeError",
    "EncodingProfile",
    "InvalidArgument",
    "MidiMessage",
    "MidiProfile",
    "MixerMap",
    "MixerOperation",
    "NotConnected",
    "Operation",
    "OscMessage",
    "OscProfile",
    "RemoteUnreachable",
    "ScriptMessage",
    "ScriptProfile",
    "TrackSelectOperation",
    "TransportOperation",
    "UnknownOperation",
    "UnknownParameter",
    "WireMessage",
    "correlation_key",
    "encode",
]
