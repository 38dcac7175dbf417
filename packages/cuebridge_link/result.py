"""
Command result type for tool handlers.

Handlers return a CommandResult instead of raising; the dispatcher renders
it as the text payload of a tool response.
"""

from dataclasses import dataclass
from typing import Any

ERROR_PREFIX = "Error: "


@dataclass
class CommandResult:
    """
    Result of a tool call.

    Attributes:
        success: True if the command succeeded
        message: Text shown to the caller
        data: Optional structured details (status, snapshot, ...)
    """

    success: bool
    message: str | None = None
    data: dict[str, Any] | None = None

    @classmethod
    def ok(cls, message: str | None = None, data: dict[str, Any] | None = None) -> "CommandResult":
        return cls(success=True, message=message, data=data)

    @classmethod
    def error(cls, message: str, data: dict[str, Any] | None = None) -> "CommandResult":
        return cls(success=False, message=message, data=data)

    @property
    def text(self) -> str:
        """Payload text; failures always start with 'Error:'."""
        if self.success:
            return self.message or "OK"
        return f"{ERROR_PREFIX}{self.message or 'Unknown error'}"
