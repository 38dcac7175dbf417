"""
cuebridge engine

Tool handlers. Each handler validates its arguments, turns them into an
Operation, and dispatches through the shared command path:

    require connection -> encode -> register acknowledgment -> send
    -> grace wait -> report whether the DAW echoed the change

Handlers return CommandResult. CueBridgeError raised on the command path
propagates to the dispatcher, which renders it as an error payload.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import ValidationError

from cuebridge_core.constants import GOTO_VERB, SWITCH_PARAMETERS
from cuebridge_core.encoding import correlation_key, encode
from cuebridge_core.encoding.midi import split_position
from cuebridge_core.operations import (
    MixerOperation,
    Operation,
    TrackSelectOperation,
    TransportOperation,
)

from .commands import MixerCommand, TrackCommand, TransportCommand
from .context import BridgeContext
from .guide import setup_guide
from .host import midi_learn_script, project_info_script
from .ledger import OperationState
from .result import CommandResult

logger = logging.getLogger(__name__)

Handler = Callable[[dict[str, Any]], Awaitable[CommandResult]]

WAITING_SUFFIX = " - Waiting for feedback..."
ACKNOWLEDGED_SUFFIX = " - Command acknowledged"
EXPIRED_SUFFIX = " - No feedback received"
SUPERSEDED_SUFFIX = " - Superseded by a newer command"
CANCELLED_SUFFIX = " - Cancelled (disconnected)"


class BridgeEngine:
    """
    Maps tool names to handlers operating on one BridgeContext.

    Example:
        >>> engine = BridgeEngine(context)
        >>> result = await engine.handle("transport", {"action": "play"})
        >>> result.message
        'Transport: play (via MMC) - Waiting for feedback...'
    """

    def __init__(self, context: BridgeContext) -> None:
        self.context = context
        self._handlers: dict[str, Handler] = {}
        self._register_handlers()

    @property
    def tool_names(self) -> list[str]:
        return list(self._handlers)

    def _register_handlers(self) -> None:
        """Register tool handlers"""
        self._handlers["connect"] = self._handle_connect
        self._handlers["disconnect"] = self._handle_disconnect
        self._handlers["status"] = self._handle_status
        self._handlers["transport"] = self._handle_transport
        self._handlers["mixer"] = self._handle_mixer
        self._handlers["track"] = self._handle_track
        self._handlers["feedback_status"] = self._handle_feedback_status
        self._handlers["setup_guide"] = self._handle_setup_guide
        self._handlers["get_project_info"] = self._handle_get_project_info
        self._handlers["setup_midi_learn"] = self._handle_setup_midi_learn

    def has_tool(self, name: str) -> bool:
        return name in self._handlers

    async def handle(self, name: str, payload: dict[str, Any] | None = None) -> CommandResult:
        """
        Run one tool.

        Raises:
            KeyError: Unknown tool name
            CueBridgeError: Command path failure
        """
        handler = self._handlers[name]
        return await handler(payload or {})

    # ================================================================
    # Connection
    # ================================================================

    async def _handle_connect(self, payload: dict[str, Any]) -> CommandResult:
        """Open the backend's channels"""
        ctx = self.context
        result = await ctx.connection.connect()
        return CommandResult.ok(
            result.describe(ctx.backend.kind),
            data=ctx.connection.status(),
        )

    async def _handle_disconnect(self, payload: dict[str, Any]) -> CommandResult:
        """Cancel pending acknowledgments and release channels"""
        ctx = self.context
        if not ctx.connection.disconnect():
            return CommandResult.ok("Not connected")
        return CommandResult.ok(f"Disconnected from {ctx.app_name} ({ctx.backend.kind})")

    async def _handle_status(self, payload: dict[str, Any]) -> CommandResult:
        status = self.context.connection.status()
        lines = [
            f"Connection status: {'Connected' if status['connected'] else 'Disconnected'}",
            f"Backend: {status['backend']}",
        ]
        if status["connected"]:
            lines.append(f"Output: {status['output']}")
            if status["input"]:
                lines.append(f"Input: {status['input']}")
            lines.append(f"Feedback monitoring: {'enabled' if status['feedback'] else 'disabled'}")
            lines.append(f"Pending acknowledgments: {status['pending']}")
        return CommandResult.ok("\n".join(lines), data=status)

    # ================================================================
    # Operations
    # ================================================================

    async def _handle_transport(self, payload: dict[str, Any]) -> CommandResult:
        """Transport verb or goto"""
        try:
            cmd = TransportCommand(**payload)
        except ValidationError as e:
            return CommandResult.error(f"Invalid transport command: {e}")

        op = TransportOperation(cmd.action, cmd.position)
        if op.verb == GOTO_VERB and op.position is not None:
            hours, minutes, seconds = split_position(op.position)
            label = f"Transport: Goto {hours}:{minutes}:{seconds}"
        else:
            label = f"Transport: {op.verb}"

        return await self._dispatch(
            op,
            label,
            context={"action": op.verb},
            grace_ms=self.context.transport_grace_ms,
        )

    async def _handle_mixer(self, payload: dict[str, Any]) -> CommandResult:
        """Set a channel-strip parameter"""
        try:
            cmd = MixerCommand(**payload)
        except ValidationError as e:
            return CommandResult.error(f"Invalid mixer command: {e}")

        op = MixerOperation(cmd.track, cmd.parameter, cmd.value)
        if op.parameter in SWITCH_PARAMETERS:
            shown = "on" if op.value else "off"
        else:
            shown = f"{float(op.value):g}"

        return await self._dispatch(
            op,
            f"Mixer: Track {op.track} {op.parameter} = {shown}",
            context={"track": op.track, "parameter": op.parameter, "value": op.value},
            grace_ms=self.context.mixer_grace_ms,
        )

    async def _handle_track(self, payload: dict[str, Any]) -> CommandResult:
        """Select a track"""
        try:
            cmd = TrackCommand(**payload)
        except ValidationError as e:
            return CommandResult.error(f"Invalid track command: {e}")

        op = TrackSelectOperation(cmd.number)
        return await self._dispatch(
            op,
            f"Track: Selected track {op.number}",
            context={"track": op.number},
            grace_ms=self.context.mixer_grace_ms,
        )

    async def _dispatch(
        self,
        op: Operation,
        label: str,
        context: dict[str, Any],
        grace_ms: float,
    ) -> CommandResult:
        ctx = self.context
        ctx.connection.require_connected()

        backend = ctx.backend
        message = encode(op, backend.profile)
        via = f"{label} (via {backend.describe(message)})"

        key = correlation_key(message, backend.profile) if backend.is_input_open else None
        entry = ctx.ledger.register(key, context) if key is not None else None

        try:
            await backend.send(message)
        except Exception:
            if key is not None:
                ctx.ledger.discard(key)
            raise
        logger.info(f"{op.name} sent: {message}")

        if entry is None:
            return CommandResult.ok(via)

        await ctx.timer.sleep(grace_ms / 1000.0)

        if entry.state is OperationState.RESOLVED:
            suffix = ACKNOWLEDGED_SUFFIX
        elif entry.state is OperationState.EXPIRED:
            suffix = EXPIRED_SUFFIX
        elif entry.state is OperationState.SUPERSEDED:
            suffix = SUPERSEDED_SUFFIX
        elif entry.state is OperationState.CANCELLED:
            suffix = CANCELLED_SUFFIX
        else:
            suffix = WAITING_SUFFIX
        return CommandResult.ok(via + suffix, data={"key": key, "state": entry.state.value})

    # ================================================================
    # Diagnostics
    # ================================================================

    async def _handle_feedback_status(self, payload: dict[str, Any]) -> CommandResult:
        """Ledger snapshot and counters"""
        ctx = self.context
        snapshot = ctx.ledger.snapshot()
        stats = ctx.ledger.stats
        counts = ctx.listener.counts

        if not ctx.backend.has_feedback:
            monitoring = f"disabled ({ctx.backend.kind} backend has no return channel)"
        elif ctx.backend.is_input_open:
            monitoring = "enabled"
        else:
            monitoring = "inactive (not connected)"

        lines = [
            f"Feedback monitoring: {monitoring}",
            f"Timeout: {ctx.ledger.default_timeout_ms:.0f} ms",
            f"Pending acknowledgments: {len(snapshot)}",
        ]
        for item in snapshot:
            details = " ".join(f"{k}={v}" for k, v in item["context"].items())
            lines.append(f"  {item['key']} ({details}) {item['elapsed_ms']} ms")
        lines.append(
            f"Registered: {stats['registered']}, resolved: {stats['resolved']}, "
            f"expired: {stats['expired']}, superseded: {stats['superseded']}, "
            f"cancelled: {stats['cancelled']}"
        )
        lines.append(
            f"Feedback received: {counts['received']} "
            f"(matched {counts['matched']}, ignored {counts['ignored']})"
        )
        return CommandResult.ok(
            "\n".join(lines),
            data={"pending": snapshot, "stats": stats, "feedback": counts},
        )

    async def _handle_setup_guide(self, payload: dict[str, Any]) -> CommandResult:
        return CommandResult.ok(setup_guide(self.context.backend, self.context.app_name))

    # ================================================================
    # Host OS
    # ================================================================

    async def _handle_get_project_info(self, payload: dict[str, Any]) -> CommandResult:
        """Name and path of the open project"""
        ctx = self.context
        output = await ctx.script_runner(project_info_script(ctx.app_name))

        if output == "not running":
            return CommandResult.error(f"{ctx.app_name} is not running")
        if output == "no project open":
            return CommandResult.ok(f"No project open in {ctx.app_name}")

        name, _, path = output.partition("\n")
        lines = [f"Project: {name}"]
        if path:
            lines.append(f"Path: {path}")
        return CommandResult.ok("\n".join(lines), data={"name": name, "path": path or None})

    async def _handle_setup_midi_learn(self, payload: dict[str, Any]) -> CommandResult:
        """Open Controller Assignments for learning mixer CCs"""
        ctx = self.context
        await ctx.script_runner(midi_learn_script(ctx.app_name))
        return CommandResult.ok(
            f"Opened Controller Assignments in {ctx.app_name}.\n"
            "Click Learn Mode, touch a control in the mixer, then send the matching "
            "mixer command with this tool set (see setup_guide for the CC table)."
        )
