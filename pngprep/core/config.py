"""
Configuration management for pngprep.

Provides a small configuration system supporting JSON files
and environment variables.
"""

import json
import os
import platform
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class PrepConfig:
    """
    Settings for a pngprep run.

    Example:
        config = PrepConfig.load("pngprep.json")
        config = apply_env_overrides(config)
    """
    operation: str = "dilate"
    png_compression: int = 3
    case_insensitive_paths: bool | None = None  # None = platform default
    verbose: bool = True

    def __post_init__(self):
        if not 0 <= self.png_compression <= 9:
            raise ValueError(f"png_compression must be 0-9, got {self.png_compression}")

    @property
    def paths_case_insensitive(self) -> bool:
        """Whether path comparisons should ignore case."""
        if self.case_insensitive_paths is not None:
            return self.case_insensitive_paths
        return platform.system() in ("Windows", "Darwin")

    @classmethod
    def load(cls, path: str | Path) -> "PrepConfig":
        """Load configuration from a JSON file."""
        return load_config(path)

    def save(self, path: str | Path) -> None:
        """Save configuration to a JSON file."""
        save_config(self, path)

    def to_dict(self) -> dict:
        """Convert configuration to a dictionary."""
        return asdict(self)


def load_config(path: str | Path) -> PrepConfig:
    """
    Load configuration from a JSON file.

    Unknown keys are ignored. Values go through the same conversion as
    environment overrides, so "false" and false both disable a flag.

    Args:
        path: Path to the JSON configuration file

    Returns:
        Parsed PrepConfig object

    Raises:
        FileNotFoundError: If the config file doesn't exist
        json.JSONDecodeError: If the JSON is invalid
        ValueError: If the top level isn't an object or a setting is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, "r") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Configuration file must contain a JSON object: {path}")

    return _merge(PrepConfig(), data)


def save_config(config: PrepConfig, path: str | Path) -> None:
    """
    Save configuration to a JSON file.

    Args:
        config: Configuration object to save
        path: Output path for the JSON file
    """
    path = Path(path)
    with open(path, "w") as f:
        json.dump(config.to_dict(), f, indent=2)


def get_env_config(prefix: str = "PNGPREP_") -> dict[str, Any]:
    """
    Get configuration from environment variables.

    All environment variables starting with the prefix will be included.
    Variable names are converted to lowercase with the prefix removed.

    Example:
        PNGPREP_VERBOSE=false -> {"verbose": "false"}
    """
    config = {}
    for key, value in os.environ.items():
        if key.startswith(prefix):
            config_key = key[len(prefix):].lower()
            config[config_key] = value
    return config


def _parse_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
    raise ValueError(f"Invalid boolean for {key}: {value!r}")


def _coerce(key: str, value: Any) -> Any:
    """
    Convert a raw setting from JSON or the environment to its field type.

    Raises:
        ValueError: If the value has the wrong type or can't be converted
    """
    if key == "operation":
        if not isinstance(value, str):
            raise ValueError(f"Invalid string for {key}: {value!r}")
        return value.strip()
    if key == "png_compression":
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, str):
            try:
                return int(value)
            except ValueError:
                pass
        raise ValueError(f"Invalid integer for {key}: {value!r}")
    if key == "case_insensitive_paths" and value is None:
        return None
    return _parse_bool(key, value)


def _merge(config: PrepConfig, raw: dict[str, Any]) -> PrepConfig:
    """Return a copy of config with the known keys of raw coerced and applied."""
    values = config.to_dict()
    known = {f.name for f in fields(PrepConfig)}

    for key, value in raw.items():
        if key in known:
            values[key] = _coerce(key, value)

    return PrepConfig(**values)


def apply_env_overrides(config: PrepConfig, prefix: str = "PNGPREP_") -> PrepConfig:
    """
    Return a copy of config with environment variable overrides applied.

    Only variables matching a PrepConfig field are used; others are ignored.

    Raises:
        ValueError: If an override can't be converted to the field's type
    """
    return _merge(config, get_env_config(prefix))
