"""
Tool dispatcher.

The boundary between the tool surface and the engine: every call returns
{"content": [{"type": "text", "text": ...}]}, and every failure becomes a
text payload beginning with "Error:". Nothing raised by a handler escapes.
"""

from __future__ import annotations

import logging
from typing import Any

from cuebridge_core.errors import CueBridgeError

from .context import BridgeContext
from .engine import BridgeEngine
from .result import CommandResult

logger = logging.getLogger(__name__)


def text_payload(text: str) -> dict[str, Any]:
    return {"content": [{"type": "text", "text": text}]}


class ToolDispatcher:
    """Runs tools by name against one BridgeContext."""

    def __init__(self, context: BridgeContext, engine: BridgeEngine | None = None) -> None:
        self.context = context
        self.engine = engine or BridgeEngine(context)

    @property
    def tool_names(self) -> list[str]:
        return self.engine.tool_names

    async def run(self, name: str, arguments: dict[str, Any] | None = None) -> CommandResult:
        """Run a tool and return its CommandResult; errors become error results."""
        if not self.engine.has_tool(name):
            return CommandResult.error(f"Unknown tool: {name}")

        try:
            result = await self.engine.handle(name, arguments)
        except CueBridgeError as e:
            logger.warning(f"{name} failed: {e}")
            return CommandResult.error(str(e))
        except Exception as e:
            logger.error(f"Unexpected error in {name}: {e}", exc_info=True)
            return CommandResult.error(f"{type(e).__name__}: {e}")

        if not result.success:
            logger.warning(f"{name} rejected: {result.message}")
        return result

    async def call(self, name: str, arguments: dict[str, Any] | None = None) -> dict[str, Any]:
        """Run a tool and return its text payload."""
        result = await self.run(name, arguments)
        return text_payload(result.text)

    async def call_text(self, name: str, arguments: dict[str, Any] | None = None) -> str:
        result = await self.run(name, arguments)
        return result.text

    def shutdown(self) -> None:
        """Release the connection (process exit)."""
        self.context.connection.disconnect()
