"""
Configuration loader — reads builds.yml into domain models.

It reads YAML, validates against Pydantic schemas, and returns typed
domain objects.  Callers decide how to treat a ConfigError: the build
command treats it as zero builds, `config check` reports it.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from docbundle.core.models.build import BuildsConfig
from docbundle.core.models.workspace import CONFIG_FILENAME

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when builds configuration is invalid or missing."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for builds.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to builds.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path) -> BuildsConfig:
    """Load and validate builds configuration.

    Args:
        path: Path to builds.yml.

    Returns:
        Validated BuildsConfig model.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading builds config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return BuildsConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = BuildsConfig.model_validate({"builds": data.get("builds")})
    except Exception as e:
        raise ConfigError(f"Invalid builds configuration: {e}") from e

    logger.info("Loaded %d build(s) from %s", len(config.builds), path)
    return config

