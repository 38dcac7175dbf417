"""
cuebridge link

Connection management, acknowledgment tracking and tool dispatch on top of
cuebridge_core encoders.
"""

from .connection import ConnectionManager, ConnectionResult
from .context import BridgeContext
from .dispatcher import ToolDispatcher, text_payload
from .engine import BridgeEngine
from .factory import create_backend, create_bridge_context, create_context
from .feedback import FeedbackListener
from .ledger import OperationState, PendingLedger, PendingOperation
from .result import CommandResult

__all__ = [
    "BridgeContext",
    "BridgeEngine",
    "CommandResult",
    "ConnectionManager",
    "ConnectionResult",
    "FeedbackListener",
    "OperationState",
    "PendingLedger",
    "PendingOperation",
    "ToolDispatcher",
    "create_backend",
    "create_bridge_context",
    "create_context",
    "text_payload",
]
