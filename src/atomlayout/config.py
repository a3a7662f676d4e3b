# src/atomlayout/config.py
"""Configuration loading utilities for atomlayout.

This module provides configuration loading that can be used by:
- The CLI
- Host applications that want file- or env-based settings

It handles:
- Finding and loading atomlayout.yaml config files
- Reading ATOMLAYOUT_* environment overrides
- Building AtomSettings objects from those sources
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

if TYPE_CHECKING:
    from atomlayout.settings import AtomSettings

CONFIG_FILES = ["atomlayout.yaml", "atomlayout.yml", ".atomlayoutrc"]

VALID_ROOT_KEYS = {"preset", "settings"}

VALID_SETTINGS_KEYS = {
    "inner_electron_shell_radius",
    "outer_electron_shell_radius",
    "nucleon_radius",
    "electron_add_mode",
    "random_seed",
}

ENV_PREFIX = "ATOMLAYOUT_"


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find a configuration file in the current directory or its parents.

    Args:
        start_dir: Directory to start searching from (default: cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    current = start_dir or Path.cwd()
    for _ in range(10):  # Limit search depth
        for config_name in CONFIG_FILES:
            config_path = current / config_name
            if config_path.exists():
                return config_path
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def validate_config(config: dict[str, Any], config_path: Path | None = None) -> list[str]:
    """Validate config and return warnings about unknown keys.

    Args:
        config: The loaded configuration dictionary
        config_path: Path to config file (for error messages)

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    unknown_root = set(config.keys()) - VALID_ROOT_KEYS
    if unknown_root:
        path_str = str(config_path) if config_path else "config"
        warnings.append(f"Unknown config keys in {path_str}: {', '.join(sorted(unknown_root))}")

    settings = config.get("settings", {})
    if isinstance(settings, dict):
        unknown_settings = set(settings.keys()) - VALID_SETTINGS_KEYS
        if unknown_settings:
            warnings.append(f"Unknown settings keys: {', '.join(sorted(unknown_settings))}")

    return warnings


def load_config(config_path: Path | str | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file.

    Args:
        config_path: Explicit path to config file, or None to search

    Returns:
        Configuration dictionary (empty if no config found)

    Raises:
        FileNotFoundError: If an explicit config_path does not exist.
    """
    path = Path(config_path) if config_path is not None else find_config_file()
    if path is None:
        return {}

    with open(path, encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return config


def _safe_float(value: str | None) -> float | None:
    """Parse float from string, returning None on invalid value."""
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _safe_int(value: str | None) -> int | None:
    """Parse int from string, returning None on invalid value."""
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def get_settings_from_env() -> dict[str, Any]:
    """Read settings from ATOMLAYOUT_* environment variables.

    Only explicitly set (and parseable) values are returned, so they can
    override YAML settings without clobbering them with defaults.
    """
    result: dict[str, Any] = {}

    for key in ("inner_electron_shell_radius", "outer_electron_shell_radius", "nucleon_radius"):
        if (val := _safe_float(os.environ.get(ENV_PREFIX + key.upper()))) is not None:
            result[key] = val
    if mode := os.environ.get(ENV_PREFIX + "ELECTRON_ADD_MODE"):
        result["electron_add_mode"] = mode.lower()
    if (seed := _safe_int(os.environ.get(ENV_PREFIX + "RANDOM_SEED"))) is not None:
        result["random_seed"] = seed
    if preset := os.environ.get(ENV_PREFIX + "PRESET"):
        result["preset"] = preset

    return result


def build_settings(
    config: dict[str, Any] | None = None,
    env_settings: dict[str, Any] | None = None,
) -> AtomSettings:
    """Build AtomSettings from YAML config and env vars.

    Precedence (highest to lowest):
    1. Environment variables
    2. YAML settings: section
    3. Preset (env or YAML ``preset:`` key)
    4. AtomSettings defaults

    Args:
        config: YAML configuration dictionary
        env_settings: Environment overrides (if None, reads from env)

    Returns:
        Configured AtomSettings instance
    """
    from atomlayout.settings import AtomSettings

    config = config or {}
    yaml_settings = {
        key: value
        for key, value in (config.get("settings") or {}).items()
        if key in VALID_SETTINGS_KEYS
    }
    env_settings = env_settings if env_settings is not None else get_settings_from_env()

    merged = {**yaml_settings, **env_settings}
    preset = merged.pop("preset", None) or config.get("preset")

    if preset:
        return AtomSettings.with_preset(preset, **merged)
    return AtomSettings(**merged)
