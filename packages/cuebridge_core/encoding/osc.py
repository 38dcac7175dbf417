"""OSC encoder: operations -> address/argument pairs."""

from __future__ import annotations

from ..constants.midi import SWITCH_PARAMETERS
from ..constants.mmc import GOTO_VERB, MMC_COMMANDS, transport_verbs
from ..errors import UnknownOperation, UnknownParameter
from ..operations import MixerOperation, Operation, TrackSelectOperation, TransportOperation
from ..profiles import OscProfile
from ..wire import OscMessage
from .values import check_position, to_osc_value


def encode_transport(op: TransportOperation, profile: OscProfile) -> OscMessage:
    """
    Encode a transport verb.

    Verbs are sent to the transport address with a 1.0 trigger argument;
    goto carries the position in seconds (sub-second precision kept).
    """
    if op.verb == GOTO_VERB:
        return OscMessage(profile.goto_address, (float(check_position(op.position)),))

    if op.verb not in MMC_COMMANDS:
        raise UnknownOperation(op.verb, transport_verbs())
    return OscMessage(profile.transport_address.format(verb=op.verb), (1.0,))


def encode_mixer(op: MixerOperation, profile: OscProfile) -> OscMessage:
    if op.parameter not in profile.parameters:
        raise UnknownParameter(op.parameter, profile.parameters)
    value = to_osc_value(op.value, switch=op.parameter in SWITCH_PARAMETERS)
    address = profile.mixer_address.format(track=op.track, parameter=op.parameter)
    return OscMessage(address, (value,))


def encode_track_select(op: TrackSelectOperation, profile: OscProfile) -> OscMessage:
    return OscMessage(profile.select_address, (op.number,))


def encode(op: Operation, profile: OscProfile) -> OscMessage:
    """Encode any operation for the OSC backend."""
    if isinstance(op, TransportOperation):
        return encode_transport(op, profile)
    if isinstance(op, MixerOperation):
        return encode_mixer(op, profile)
    if isinstance(op, TrackSelectOperation):
        return encode_track_select(op, profile)
    raise UnknownOperation(type(op).__name__, ["transport", "mixer", "track"], kind="operation")
