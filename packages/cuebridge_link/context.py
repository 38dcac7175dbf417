"""
Bridge context: every piece of per-process state, passed explicitly to the
engine instead of living in module globals.
"""

from __future__ import annotations

from dataclasses import dataclass

from .connection import ConnectionManager
from .feedback import FeedbackListener
from .host import ScriptRunner
from .ledger import PendingLedger
from .protocols import ControlBackend, Timer

DEFAULT_TRANSPORT_GRACE_MS = 500.0
DEFAULT_MIXER_GRACE_MS = 1000.0


@dataclass
class BridgeContext:
    """
    Backend, ledger, listener and connection for one bridge.

    Attributes:
        backend: Active control backend
        ledger: Pending-operation ledger
        listener: Feedback listener wired to the ledger
        connection: Connection manager for backend
        timer: Clock shared by ledger and grace waits
        transport_grace_ms: Wait after a transport command before reporting
        mixer_grace_ms: Wait after a mixer/track command before reporting
        app_name: Remote application name (for host scripting)
        script_runner: Runs AppleScript for the host-OS tools
    """

    backend: ControlBackend
    ledger: PendingLedger
    listener: FeedbackListener
    connection: ConnectionManager
    timer: Timer
    script_runner: ScriptRunner
    transport_grace_ms: float = DEFAULT_TRANSPORT_GRACE_MS
    mixer_grace_ms: float = DEFAULT_MIXER_GRACE_MS
    app_name: str = "Logic Pro"
