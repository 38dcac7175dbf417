"""Control backends: MIDI, OSC and AppleScript."""

from .midi_backend import MidiBackend, list_ports, select_port
from .osc_backend import OscBackend
from .script_backend import AppleScriptBackend

__all__ = [
    "AppleScriptBackend",
    "MidiBackend",
    "OscBackend",
    "list_ports",
    "select_port",
]
