"""Centralized configuration using Pydantic Settings

All environment variables (CUEBRIDGE_*) are managed here.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Bridge settings loaded from environment variables and .env"""

    model_config = SettingsConfigDict(
        env_prefix="CUEBRIDGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Backend selection
    backend: Literal["midi", "osc", "applescript"] = "midi"
    app_name: str = "Logic Pro"

    # MIDI Configuration
    midi_output_port: str | None = None
    midi_input_port: str | None = None
    midi_port_match: str | None = "IAC"
    mixer_map_file: Path | None = None

    # OSC Configuration
    osc_host: str = "127.0.0.1"
    osc_port: int = Field(default=7000, ge=1, le=65535)
    osc_feedback_port: int = Field(default=8000, ge=0, le=65535)  # 0 disables feedback

    # Acknowledgment tracking
    feedback_timeout_ms: float = Field(default=3000.0, gt=0)
    transport_grace_ms: float = Field(default=500.0, ge=0)
    mixer_grace_ms: float = Field(default=1000.0, ge=0)

    # Logging
    log_level: str = "INFO"
