"""
Encoding profiles with Pydantic validation.

A profile is the backend configuration an encoder needs besides the
operation itself: the MIDI controller table, OSC address templates, or the
AppleScript target application. Profiles are validated once at startup.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from .constants import midi

ControllerNumber = Annotated[int, Field(ge=0, le=127)]
ChannelNumber = Annotated[int, Field(ge=0, le=15)]


class MixerMap(BaseModel):
    """
    Mixer parameter -> MIDI controller table.

    `per_track` parameters use a fixed controller number on the track's own
    channel (clamp(track - 1, 0, 15)). `ranged` parameters use controller
    `base + track - 1` on `global_channel`.

    Example:
        >>> mixer_map = MixerMap()
        >>> mixer_map.ranged["mute"]
        16
    """

    model_config = ConfigDict(frozen=True)

    per_track: dict[str, ControllerNumber] = Field(
        default_factory=lambda: {"volume": midi.CC_VOLUME, "pan": midi.CC_PAN},
        description="Parameters sent on the track's own channel",
    )
    ranged: dict[str, ControllerNumber] = Field(
        default_factory=lambda: {
            "mute": midi.CC_MUTE_BASE,
            "solo": midi.CC_SOLO_BASE,
            "send1": midi.CC_SEND1_BASE,
            "send2": midi.CC_SEND2_BASE,
        },
        description="Parameters sent as base + (track - 1) on the global channel",
    )
    global_channel: ChannelNumber = Field(default=midi.GLOBAL_CHANNEL)
    select_controller: ControllerNumber = Field(
        default=midi.CC_BANK_SELECT,
        description="Controller used for track select on the global channel",
    )

    @field_validator("ranged")
    @classmethod
    def validate_disjoint(cls, v: dict[str, int], info: ValidationInfo) -> dict[str, int]:
        """A parameter may appear in only one of the two tables"""
        overlap = set(v) & set(info.data.get("per_track", {}))
        if overlap:
            raise ValueError(f"Parameters mapped twice: {sorted(overlap)}")
        return v

    @property
    def parameters(self) -> list[str]:
        return [*self.per_track, *self.ranged]


class MidiProfile(BaseModel):
    """Encoding profile for the MIDI backend."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["midi"] = "midi"
    mixer_map: MixerMap = Field(default_factory=MixerMap)


class OscProfile(BaseModel):
    """
    Encoding profile for the OSC backend.

    Address templates are formatted with `verb`, `track` and `parameter`.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["osc"] = "osc"
    transport_address: str = "/transport/{verb}"
    goto_address: str = "/transport/goto"
    mixer_address: str = "/track/{track}/{parameter}"
    select_address: str = "/track/select"
    parameters: tuple[str, ...] = ("volume", "pan", "mute", "solo", "send1", "send2")

    @field_validator("transport_address", "goto_address", "mixer_address", "select_address")
    @classmethod
    def validate_address(cls, v: str) -> str:
        """Ensure OSC address starts with /"""
        if not v.startswith("/"):
            raise ValueError(f"OSC address must start with '/': {v}")
        return v

    @property
    def transport_prefix(self) -> str:
        """Static part of the transport address, used to match feedback"""
        return self.transport_address.split("{", 1)[0]


class ScriptProfile(BaseModel):
    """Encoding profile for the AppleScript backend."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["applescript"] = "applescript"
    app_name: str = Field(default="Logic Pro", min_length=1)


EncodingProfile = MidiProfile | OscProfile | ScriptProfile
