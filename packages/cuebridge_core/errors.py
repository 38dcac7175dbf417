"""Exceptions for the cuebridge framework."""

from __future__ import annotations

from collections.abc import Iterable


class CueBridgeError(Exception):
    """Base exception for all cuebridge errors"""
    pass


class NotConnected(CueBridgeError):
    """Operation attempted before connect()"""

    def __init__(self, message: str = "Not connected") -> None:
        super().__init__(message)


class UnknownOperation(CueBridgeError):
    """Transport verb (or other operation name) not in the supported set"""

    def __init__(self, name: str, valid: Iterable[str], kind: str = "transport action") -> None:
        self.name = name
        self.valid = list(valid)
        super().__init__(
            f"Unknown {kind}: {name}. Available: {', '.join(self.valid)}"
        )


class UnknownParameter(CueBridgeError):
    """Mixer parameter not supported by the active backend"""

    def __init__(self, name: str, valid: Iterable[str]) -> None:
        self.name = name
        self.valid = list(valid)
        super().__init__(
            f"Unknown mixer parameter: {name}. Available: {', '.join(self.valid) or 'none'}"
        )


class InvalidArgument(CueBridgeError):
    """Argument is well-formed but cannot be encoded (out of range, missing)"""
    pass


class ChannelFailure(CueBridgeError):
    """Backend could not open, write to or close a channel"""
    pass


class RemoteUnreachable(CueBridgeError):
    """Target application is not running or not responding"""
    pass
