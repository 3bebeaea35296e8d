"""
Configuration loader: reads an optional bootstrap YAML into settings.

Without a file the compiled-in defaults of ``BootstrapSettings`` are
used, so the plain ``vmbootstrap`` invocation needs no arguments. A
file may hold the settings flat or wrapped under a ``bootstrap:`` key.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

from vmbootstrap.core.models.settings import BootstrapSettings

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "VMB_CONFIG"


class ConfigError(Exception):
    """Raised when the bootstrap configuration is invalid or missing."""


def resolve_config_path(explicit: Path | None = None) -> Path | None:
    """Pick the config file: explicit path first, then ``VMB_CONFIG``."""
    if explicit is not None:
        return explicit
    env_value = os.environ.get(CONFIG_ENV_VAR, "").strip()
    return Path(env_value) if env_value else None


def load_settings(path: Path | None = None) -> BootstrapSettings:
    """Load and validate bootstrap settings.

    Args:
        path: Explicit path to a YAML file. If None, ``VMB_CONFIG`` is
            consulted; if that is unset too, defaults are returned.

    Returns:
        Validated BootstrapSettings.

    Raises:
        ConfigError: If the file is missing, unreadable or invalid.
    """
    path = resolve_config_path(path)
    if path is None:
        logger.debug("No bootstrap config given, using built-in defaults")
        return BootstrapSettings()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading bootstrap config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    settings_data = data.get("bootstrap", data)
    if not isinstance(settings_data, dict):
        raise ConfigError(f"Expected 'bootstrap' to be a mapping in {path}")

    try:
        settings = BootstrapSettings.model_validate(settings_data)
    except Exception as e:
        raise ConfigError(f"Invalid bootstrap configuration: {e}") from e

    logger.info("Loaded bootstrap config from %s (repo=%s)", path, settings.repo_url)
    return settings
