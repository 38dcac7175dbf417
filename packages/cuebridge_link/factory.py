"""
cuebridge factory

Factory functions for building a BridgeContext with real I/O dependencies.
Separates object creation from dispatch logic (DI pattern).
"""

from __future__ import annotations

from pathlib import Path

from cuebridge_core.loader import load_mixer_map_from_file
from cuebridge_core.profiles import MixerMap, OscProfile

from .backends import AppleScriptBackend, MidiBackend, OscBackend
from .connection import ConnectionManager
from .context import DEFAULT_MIXER_GRACE_MS, DEFAULT_TRANSPORT_GRACE_MS, BridgeContext
from .feedback import FeedbackListener
from .host import ScriptRunner, run_osascript
from .ledger import PendingLedger
from .protocols import ControlBackend, Timer
from .timers import AsyncioTimer

BACKEND_KINDS = ("midi", "osc", "applescript")


def create_backend(
    kind: str = "midi",
    midi_output_port: str | None = None,
    midi_input_port: str | None = None,
    midi_port_match: str | None = "IAC",
    mixer_map: MixerMap | None = None,
    osc_host: str = "127.0.0.1",
    osc_port: int = 7000,
    osc_feedback_port: int = 8000,
    app_name: str = "Logic Pro",
    script_runner: ScriptRunner | None = None,
) -> ControlBackend:
    """
    Create the backend selected by kind.

    Raises:
        ValueError: Unknown backend kind
    """
    if kind == "midi":
        return MidiBackend(
            output_port=midi_output_port,
            input_port=midi_input_port,
            port_match=midi_port_match,
            mixer_map=mixer_map,
        )
    if kind == "osc":
        return OscBackend(host=osc_host, port=osc_port, feedback_port=osc_feedback_port)
    if kind == "applescript":
        return AppleScriptBackend(app_name=app_name, runner=script_runner)
    raise ValueError(f"Unknown backend: {kind}. Available: {', '.join(BACKEND_KINDS)}")


def create_context(
    backend: ControlBackend,
    timer: Timer | None = None,
    feedback_timeout_ms: float = PendingLedger.DEFAULT_TIMEOUT_MS,
    transport_grace_ms: float = DEFAULT_TRANSPORT_GRACE_MS,
    mixer_grace_ms: float = DEFAULT_MIXER_GRACE_MS,
    app_name: str = "Logic Pro",
    script_runner: ScriptRunner | None = None,
) -> BridgeContext:
    """
    Wire ledger, listener and connection manager around a backend.

    Args:
        backend: ControlBackend implementation (real or mock)
        timer: Timer implementation (default: AsyncioTimer)
        feedback_timeout_ms: Acknowledgment timeout per pending operation
        transport_grace_ms: Grace wait after transport commands
        mixer_grace_ms: Grace wait after mixer/track commands
        app_name: Remote application name
        script_runner: AppleScript runner (default: osascript)

    Returns:
        Configured BridgeContext
    """
    timer = timer if timer is not None else AsyncioTimer()
    ledger = PendingLedger(timer, default_timeout_ms=feedback_timeout_ms)
    osc_profile = backend.profile if isinstance(backend.profile, OscProfile) else None
    listener = FeedbackListener(ledger, osc_profile)

    return BridgeContext(
        backend=backend,
        ledger=ledger,
        listener=listener,
        connection=ConnectionManager(backend, ledger, listener),
        timer=timer,
        script_runner=script_runner or run_osascript,
        transport_grace_ms=transport_grace_ms,
        mixer_grace_ms=mixer_grace_ms,
        app_name=app_name,
    )


def create_bridge_context(
    backend: str = "midi",
    midi_output_port: str | None = None,
    midi_input_port: str | None = None,
    midi_port_match: str | None = "IAC",
    mixer_map_file: str | Path | None = None,
    osc_host: str = "127.0.0.1",
    osc_port: int = 7000,
    osc_feedback_port: int = 8000,
    app_name: str = "Logic Pro",
    feedback_timeout_ms: float = PendingLedger.DEFAULT_TIMEOUT_MS,
    transport_grace_ms: float = DEFAULT_TRANSPORT_GRACE_MS,
    mixer_grace_ms: float = DEFAULT_MIXER_GRACE_MS,
) -> BridgeContext:
    """
    Create a production BridgeContext from plain settings values.

    Raises:
        ValueError: Unknown backend or invalid mixer map file
        FileNotFoundError: mixer_map_file does not exist
    """
    mixer_map = load_mixer_map_from_file(mixer_map_file) if mixer_map_file else None
    control = create_backend(
        backend,
        midi_output_port=midi_output_port,
        midi_input_port=midi_input_port,
        midi_port_match=midi_port_match,
        mixer_map=mixer_map,
        osc_host=osc_host,
        osc_port=osc_port,
        osc_feedback_port=osc_feedback_port,
        app_name=app_name,
    )
    return create_context(
        control,
        feedback_timeout_ms=feedback_timeout_ms,
        transport_grace_ms=transport_grace_ms,
        mixer_grace_ms=mixer_grace_ms,
        app_name=app_name,
    )
