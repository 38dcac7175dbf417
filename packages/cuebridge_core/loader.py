"""
Mixer map loader.

Loads a MixerMap from YAML or JSON files with validation.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from .profiles import MixerMap


def load_mixer_map(config_data: dict[str, Any]) -> MixerMap:
    """
    Load and validate a mixer map from a configuration dictionary.

    Args:
        config_data: Dictionary with a "mixer" key holding MixerMap fields

    Returns:
        Validated MixerMap

    Raises:
        ValueError: If the "mixer" key is missing or not a mapping
        pydantic.ValidationError: If validation fails

    Example:
        >>> load_mixer_map({"mixer": {"ranged": {"mute": 20}}}).ranged
        {'mute': 20}
    """
    if "mixer" not in config_data:
        raise ValueError("Configuration must have 'mixer' key")

    mixer = config_data["mixer"]
    if not isinstance(mixer, dict):
        raise ValueError("'mixer' must be a dictionary")

    return MixerMap(**mixer)


def load_mixer_map_from_file(file_path: Path | str) -> MixerMap:
    """
    Load a mixer map from a YAML or JSON file.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file format or configuration is invalid
    """
    path = Path(file_path)

    if not path.exists():
        raise FileNotFoundError(f"Mixer map file not found: {path}")

    content = path.read_text(encoding="utf-8")

    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        try:
            config_data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
    elif suffix == ".json":
        try:
            config_data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
    else:
        raise ValueError(
            f"Unsupported file format: {suffix}. Use .yaml, .yml, or .json"
        )

    if not isinstance(config_data, dict):
        raise ValueError(f"Configuration must be a dictionary, got {type(config_data)}")

    return load_mixer_map(config_data)
