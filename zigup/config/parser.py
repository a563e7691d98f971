"""YAML configuration parser for zigup.

This module provides parsing and validation for the optional user
configuration file (default: ~/.zigup/config.yaml).

Example config.yaml:

    proxy: http://127.0.0.1:8080
    index_url: https://ziglang.org/download/index.json
    install_root: ~/.zigup
    bin_dir: ~/.local/bin
    lock_timeout: 300
    timeout: 60
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from zigup.core.directory import get_default_config_path
from zigup.core.environment import Environment, HostEnvironment
from zigup.core.exceptions import ConfigError
from zigup.core.locking import DEFAULT_LOCK_TIMEOUT
from zigup.toolchain.index import INDEX_URL

logger = logging.getLogger(__name__)

_STRING_FIELDS = ("proxy", "index_url")
_PATH_FIELDS = ("install_root", "bin_dir")
_NUMBER_FIELDS = ("lock_timeout", "timeout")


@dataclass
class ZigupConfig:
    """User configuration. Paths left as None use the platform defaults."""

    proxy: Optional[str] = None
    index_url: str = INDEX_URL
    install_root: Optional[Path] = None
    bin_dir: Optional[Path] = None
    lock_timeout: float = DEFAULT_LOCK_TIMEOUT
    timeout: Optional[float] = None  # None: no HTTP timeout


def parse_config(config_path: Path) -> ZigupConfig:
    """
    Parse a zigup configuration file.

    Args:
        config_path: Path to config.yaml

    Returns:
        Parsed and validated configuration

    Raises:
        ConfigError: If the file is missing or invalid
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax in {config_path}") from e
    except OSError as e:
        raise ConfigError(f"read configuration file {config_path}") from e

    # An empty file means "all defaults"
    if data is None:
        return ZigupConfig()

    return _parse_and_validate(data, config_path)


def _parse_and_validate(data, source: Path) -> ZigupConfig:
    """Parse and validate configuration data."""
    if not isinstance(data, dict):
        raise ConfigError(f"{source}: top level must be a mapping")

    known = set(_STRING_FIELDS + _PATH_FIELDS + _NUMBER_FIELDS)
    unknown = sorted(str(key) for key in data if key not in known)
    if unknown:
        raise ConfigError(f"{source}: unknown configuration keys: {', '.join(unknown)}")

    config = ZigupConfig()

    for key in _STRING_FIELDS:
        value = data.get(key)
        if value is None:
            continue
        if not isinstance(value, str) or not value:
            raise ConfigError(f"{source}: '{key}' must be a non-empty string")
        setattr(config, key, value)

    for key in _PATH_FIELDS:
        value = data.get(key)
        if value is None:
            continue
        if not isinstance(value, str) or not value:
            raise ConfigError(f"{source}: '{key}' must be a path string")
        setattr(config, key, Path(value).expanduser())

    for key in _NUMBER_FIELDS:
        value = data.get(key)
        if value is None:
            continue
        # bool is an int subclass
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            raise ConfigError(f"{source}: '{key}' must be a positive number")
        setattr(config, key, value)

    return config


def load_config(
    config_path: Optional[Path] = None, env: Optional[Environment] = None
) -> ZigupConfig:
    """
    Load configuration, falling back to defaults.

    An explicitly given path must exist; the default path is optional.

    Args:
        config_path: Explicit configuration file
        env: Environment provider used to locate the default file

    Raises:
        ConfigError: If the configuration is invalid
    """
    if config_path is not None:
        return parse_config(config_path)

    default_path = get_default_config_path(env or HostEnvironment())
    if not default_path.exists():
        logger.debug(f"Config file not found (optional): {default_path}")
        return ZigupConfig()

    logger.debug(f"Loading configuration from {default_path}")
    return parse_config(default_path)


__all__ = ["ZigupConfig", "parse_config", "load_config"]
