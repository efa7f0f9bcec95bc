"""
Configuration loader — resolves where ferry installs and syncs from.

Settings are resolved in precedence order:
    environment variables  >  config.yml  >  built-in defaults

Environment variables:
    FERRY_REGISTRY_URL   registry source (URL or local checkout path)
    FERRY_ROOT           installation root (default: home directory)
    FERRY_GITHUB_API     GitHub API base used by ``dev import``
    FERRY_CONFIG         explicit path to config.yml
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping

import yaml
from pydantic import BaseModel, Field

from ferry.core.errors import FerryError

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_URL = "https://github.com/ferry-pm/ferry/archive/refs/heads/main.tar.gz"
DEFAULT_GITHUB_API = "https://api.github.com"

CONFIG_FILE = "config.yml"
REGISTRY_ENV = "FERRY_REGISTRY_URL"

# yaml key → env var
_ENV_KEYS = {
    "registry": REGISTRY_ENV,
    "root": "FERRY_ROOT",
    "github_api": "FERRY_GITHUB_API",
}


class ConfigError(FerryError):
    """Raised when configuration is invalid or missing."""


class Settings(BaseModel):
    """Resolved configuration for one engine instance."""

    registry: str = DEFAULT_REGISTRY_URL
    root: Path = Field(default_factory=Path.home)
    github_api: str = DEFAULT_GITHUB_API
    config_path: Path | None = None


def default_config_path(environ: Mapping[str, str] | None = None) -> Path:
    """``$FERRY_CONFIG`` or ``~/.config/ferry/config.yml``."""
    env = os.environ if environ is None else environ
    explicit = env.get("FERRY_CONFIG")
    if explicit:
        return Path(explicit).expanduser()
    return Path.home() / ".config" / "ferry" / CONFIG_FILE


def read_config_file(path: Path) -> dict:
    """Read config.yml.  A missing file is an empty config.

    Raises:
        ConfigError: If the file exists but is not a YAML mapping.
    """
    if not path.is_file():
        logger.debug("No config file at %s", path)
        return {}

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    unknown = sorted(set(data) - set(_ENV_KEYS))
    if unknown:
        logger.warning("Ignoring unknown keys in %s: %s", path, ", ".join(unknown))
    return {k: v for k, v in data.items() if k in _ENV_KEYS}


def load_settings(
    environ: Mapping[str, str] | None = None,
    config_path: Path | None = None,
) -> Settings:
    """Resolve settings from environment, config file and defaults.

    Args:
        environ: Environment mapping (default: ``os.environ``).
        config_path: Explicit config file.  If None, uses
            ``default_config_path()``.

    Raises:
        ConfigError: If the config file is invalid.
    """
    env = os.environ if environ is None else environ
    path = config_path or default_config_path(env)
    values: dict = read_config_file(path)

    for key, var in _ENV_KEYS.items():
        if env.get(var):
            values[key] = env[var]

    if "root" in values:
        values["root"] = Path(str(values["root"])).expanduser()

    try:
        settings = Settings(config_path=path if path.is_file() else None, **values)
    except Exception as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    logger.debug("Settings: registry=%s root=%s", settings.registry, settings.root)
    return settings
