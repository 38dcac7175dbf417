"""
cuebridge link protocols

Abstract interfaces for testability via dependency injection.
Uses typing.Protocol for structural subtyping (duck typing).
"""

from .backend import ControlBackend
from .timer import Timer, TimerHandle

__all__ = [
    "ControlBackend",
    "Timer",
    "TimerHandle",
]
