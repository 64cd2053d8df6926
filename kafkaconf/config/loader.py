"""Layered TOML configuration files.

A config directory holds `default.toml` plus optional per-environment overlays
such as `production.toml`. The overlay named by KAFKACONF_ENV is merged over
the defaults, table by table, so a `[kafka]` overlay only needs the keys it
changes.
"""

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from kafkaconf.observability.logging import get_logger

logger = get_logger(__name__)

CONFIG_DIR_ENV_VAR = "KAFKACONF_CONFIG_DIR"
ENVIRONMENT_ENV_VAR = "KAFKACONF_ENV"
DEFAULT_ENVIRONMENT = "development"
DEFAULT_CONFIG_FILE = "default.toml"

# Parent directories searched for config/ before giving up
_SEARCH_DEPTH = 5


def _environ(environ: Mapping[str, str] | None) -> Mapping[str, str]:
    return os.environ if environ is None else environ


def get_config_dir(environ: Mapping[str, str] | None = None) -> Path:
    """Locate the config directory.

    KAFKACONF_CONFIG_DIR wins when set and must exist. Otherwise the nearest
    `config/` in the working directory or its parents is used.
    """
    explicit = _environ(environ).get(CONFIG_DIR_ENV_VAR)
    if explicit:
        path = Path(explicit)
        if not path.is_dir():
            raise FileNotFoundError(f"{CONFIG_DIR_ENV_VAR} points to a missing directory: {explicit}")
        return path

    start = Path.cwd()
    for directory in [start, *start.parents][:_SEARCH_DEPTH]:
        candidate = directory / "config"
        if candidate.is_dir():
            return candidate

    return Path("config")


def get_environment_name(environ: Mapping[str, str] | None = None) -> str:
    """Name of the active overlay, from KAFKACONF_ENV."""
    return _environ(environ).get(ENVIRONMENT_ENV_VAR, DEFAULT_ENVIRONMENT)


def load_toml(file_path: Path) -> dict[str, Any]:
    """Read one TOML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    if not file_path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    with file_path.open("rb") as f:
        return tomllib.load(f)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into a copy of base; tables merge, everything else replaces."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_config(
    config_dir: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Load default.toml and merge the active environment overlay over it.

    Args:
        config_dir: Directory to read from instead of get_config_dir()
        environ: Variables consulted for KAFKACONF_CONFIG_DIR / KAFKACONF_ENV
            (default: os.environ)

    Returns:
        Merged configuration dictionary
    """
    if config_dir is None:
        config_dir = get_config_dir(environ)

    default_path = config_dir / DEFAULT_CONFIG_FILE
    if not default_path.is_file():
        raise FileNotFoundError(
            f"Default configuration file not found: {default_path}. "
            f"Create config/{DEFAULT_CONFIG_FILE} or set {CONFIG_DIR_ENV_VAR}."
        )
    config = load_toml(default_path)
    loaded = [default_path.name]

    overlay_path = config_dir / f"{get_environment_name(environ)}.toml"
    if overlay_path != default_path and overlay_path.is_file():
        config = deep_merge(config, load_toml(overlay_path))
        loaded.append(overlay_path.name)

    logger.debug("config_files_loaded", config_dir=str(config_dir), files=loaded)
    return config
