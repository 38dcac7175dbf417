"""Backend-specific setup instructions returned by the setup_guide tool."""

from __future__ import annotations

from cuebridge_core.profiles import MidiProfile, OscProfile, ScriptProfile

from .protocols import ControlBackend


def _midi_guide(profile: MidiProfile, app_name: str) -> str:
    mixer_map = profile.mixer_map
    ranged = ", ".join(
        f"{name} CC{base}+ (track-1)" for name, base in mixer_map.ranged.items()
    )
    per_track = ", ".join(f"{name} CC{cc}" for name, cc in mixer_map.per_track.items())
    return f"""MIDI setup for {app_name}

1. Open Audio MIDI Setup > Window > Show MIDI Studio.
2. Double-click "IAC Driver" and enable "Device is online".
3. In {app_name}: Settings > Synchronization > MIDI:
   - enable "Listen to MMC Input"
   - enable "Transmit MMC" so transport acknowledgments come back
4. In {app_name}: Control Surfaces > Controller Assignments (Cmd-K),
   learn the mixer controls below (setup_midi_learn opens the window):
   - per track channel (Ch = track, max 16): {per_track}
   - global channel Ch{mixer_map.global_channel + 1}: {ranged}
   - track select: CC{mixer_map.select_controller} on Ch{mixer_map.global_channel + 1}
5. Use connect, then transport / mixer / track.

Feedback: echoed MMC and CC messages on the IAC input confirm commands.
Without them the tools report "Waiting for feedback..." and the pending
entry expires after the feedback timeout."""


def _osc_guide(profile: OscProfile, app_name: str) -> str:
    return f"""OSC setup for {app_name}

1. Add an OSC control surface in {app_name} (Control Surfaces > Setup).
2. Point it at this machine and the configured OSC port
   (CUEBRIDGE_OSC_HOST / CUEBRIDGE_OSC_PORT).
3. Set the surface's reply port to CUEBRIDGE_OSC_FEEDBACK_PORT
   (0 disables feedback tracking).

Addresses sent:
   transport: {profile.transport_address} 1.0
   goto:      {profile.goto_address} <seconds>
   mixer:     {profile.mixer_address} <value 0.0-1.0>
   select:    {profile.select_address} <track>
Parameters: {", ".join(profile.parameters)}"""


def _script_guide(profile: ScriptProfile) -> str:
    return f"""AppleScript setup for {profile.app_name}

1. System Settings > Privacy & Security > Accessibility:
   allow the terminal or agent host running cuebridge.
2. Keep the default key commands in {profile.app_name}
   (keypad Enter = play, keypad 0 = stop, R = record, ",", "." = rewind/forward).
3. Use connect, then transport / track.

The AppleScript backend has no feedback channel and does not support
mixer parameters; use the midi or osc backend for mixing."""


def setup_guide(backend: ControlBackend, app_name: str = "Logic Pro") -> str:
    """Setup instructions for the active backend."""
    profile = backend.profile
    if isinstance(profile, MidiProfile):
        return _midi_guide(profile, app_name)
    if isinstance(profile, OscProfile):
        return _osc_guide(profile, app_name)
    if isinstance(profile, ScriptProfile):
        return _script_guide(profile)
    return f"No setup guide for backend '{backend.kind}'"
