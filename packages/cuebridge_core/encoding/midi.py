"""
MIDI encoder: operations -> MMC sysex frames and Control Change messages.

Wire formats:
- Transport:  F0 7F 7F 06 <cmd> F7
- Goto:       F0 7F 7F 06 44 06 01 hh mm ss 00 00 F7
- Mixer:      [0xB0 + channel, controller, value]
"""

from __future__ import annotations

import math

from ..constants.midi import MAX_DATA, SWITCH_PARAMETERS, track_channel
from ..constants.mmc import (
    GOTO_VERB,
    LOCATE_INFO_LENGTH,
    LOCATE_TARGET,
    MMC_COMMANDS,
    MMC_LOCATE,
    MMC_PREFIX,
    SYSEX_END,
    transport_verbs,
)
from ..errors import InvalidArgument, UnknownOperation, UnknownParameter
from ..operations import MixerOperation, Operation, TrackSelectOperation, TransportOperation
from ..profiles import MidiProfile
from ..wire import MidiMessage
from .values import check_position, to_midi_value

# MMC hours field is 5 bits wide (upper bits carry the frame rate)
MAX_LOCATE_HOURS = 23


def split_position(position: float) -> tuple[int, int, int]:
    """
    Split a position in seconds into (hours, minutes, seconds).

    Sub-second precision is dropped; MMC frames/subframes are sent as zero.

    Example:
        >>> split_position(3661)
        (1, 1, 1)
    """
    total = math.floor(position)
    minutes, seconds = divmod(total, 60)
    hours, minutes = divmod(minutes, 60)
    return hours, minutes, seconds


def encode_goto(position: float | None) -> MidiMessage:
    """Encode an MMC Goto/Locate frame for a position in seconds."""
    position = check_position(position)
    hours, minutes, seconds = split_position(position)
    if hours > MAX_LOCATE_HOURS:
        raise InvalidArgument(
            f"goto position {position}s exceeds {MAX_LOCATE_HOURS}h, not representable in MMC"
        )

    return MidiMessage((
        *MMC_PREFIX,
        MMC_LOCATE,
        LOCATE_INFO_LENGTH,
        LOCATE_TARGET,
        hours,
        minutes,
        seconds,
        0x00,  # frames
        0x00,  # subframes
        SYSEX_END,
    ))


def encode_transport(op: TransportOperation) -> MidiMessage:
    """Encode a transport verb as an MMC command frame."""
    if op.verb == GOTO_VERB:
        return encode_goto(op.position)

    command = MMC_COMMANDS.get(op.verb)
    if command is None:
        raise UnknownOperation(op.verb, transport_verbs())
    return MidiMessage((*MMC_PREFIX, command, SYSEX_END))


def encode_mixer(op: MixerOperation, profile: MidiProfile) -> MidiMessage:
    """Encode a mixer parameter change as a Control Change message."""
    mixer_map = profile.mixer_map
    value = to_midi_value(op.value, switch=op.parameter in SWITCH_PARAMETERS)

    if op.parameter in mixer_map.per_track:
        return MidiMessage.control_change(
            track_channel(op.track), mixer_map.per_track[op.parameter], value
        )

    if op.parameter in mixer_map.ranged:
        control = mixer_map.ranged[op.parameter] + (op.track - 1)
        if control > MAX_DATA:
            raise InvalidArgument(
                f"Track {op.track} is out of range for '{op.parameter}' "
                f"(controller {control} > {MAX_DATA})"
            )
        return MidiMessage.control_change(mixer_map.global_channel, control, value)

    raise UnknownParameter(op.parameter, mixer_map.parameters)


def encode_track_select(op: TrackSelectOperation, profile: MidiProfile) -> MidiMessage:
    """Encode track selection as a bank-select style CC on the global channel."""
    mixer_map = profile.mixer_map
    return MidiMessage.control_change(
        mixer_map.global_channel,
        mixer_map.select_controller,
        min(MAX_DATA, op.number - 1),
    )


def encode(op: Operation, profile: MidiProfile) -> MidiMessage:
    """Encode any operation for the MIDI backend."""
    if isinstance(op, TransportOperation):
        return encode_transport(op)
    if isinstance(op, MixerOperation):
        return encode_mixer(op, profile)
    if isinstance(op, TrackSelectOperation):
        return encode_track_select(op, profile)
    raise UnknownOperation(type(op).__name__, ["transport", "mixer", "track"], kind="operation")
