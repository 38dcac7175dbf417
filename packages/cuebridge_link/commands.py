"""
Pydantic models for tool argument validation.

Each tool taking arguments has a model; handlers construct it from the raw
argument dict and turn ValidationError into an error result.
"""

import math

from pydantic import BaseModel, Field, field_validator

from cuebridge_core.constants import MAX_TRACKS


class TransportCommand(BaseModel):
    """
    Transport tool arguments.

    Fields:
        action: Transport verb (play, stop, goto, ...)
        position: Seconds from the start, required for goto
    """

    action: str
    position: float | None = Field(default=None, ge=0, allow_inf_nan=False)

    @field_validator("action")
    @classmethod
    def normalize_action(cls, v: str) -> str:
        return v.strip().lower()


class MixerCommand(BaseModel):
    """
    Mixer tool arguments.

    Fields:
        track: 1-based track number
        parameter: volume, pan, mute, solo, send1 or send2
        value: 0.0-1.0 for continuous parameters, bool for mute/solo
    """

    track: int = Field(ge=1, le=MAX_TRACKS)
    parameter: str
    value: bool | float

    @field_validator("parameter")
    @classmethod
    def normalize_parameter(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("value")
    @classmethod
    def finite_value(cls, v: bool | float) -> bool | float:
        if not isinstance(v, bool) and not math.isfinite(v):
            raise ValueError(f"value must be finite, got {v}")
        return v


class TrackCommand(BaseModel):
    """Track selection arguments (1-based track number)."""

    number: int = Field(ge=1)
