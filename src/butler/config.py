"""
butler.config - Configuration Loading
=====================================

Templates are configured in a TOML file::

    default_destination = "./src"

    [[templates]]
    name = "node"
    url = "https://example.com/node-tpl.git"

Lookup Order
------------
1. An explicit path (``--config`` on the command line)
2. The ``BUTLER_CONFIG`` environment variable
3. ``butler.toml`` in the current directory
4. ``.butler.toml`` in the user's home directory

The first existing file wins. Name uniqueness is validated here, once, by
:class:`~butler.models.ButlerConfig`.
"""

from __future__ import annotations

import os
from pathlib import Path

import pydantic
import tomli

from butler.errors import ConfigError
from butler.models import ButlerConfig


CONFIG_ENV_VAR = "BUTLER_CONFIG"
CONFIG_FILENAME = "butler.toml"
USER_CONFIG_FILENAME = ".butler.toml"


def find_config_file(explicit: Path | None = None) -> Path:
    """
    Locate the configuration file to use.

    Parameters
    ----------
    explicit : Path | None
        Path given on the command line. When set it must exist; no other
        location is tried.

    Returns
    -------
    Path
        Path of the configuration file.

    Raises
    ------
    ConfigError
        If no configuration file can be found.
    """
    if explicit is not None:
        if not explicit.is_file():
            raise ConfigError(f"Config file not found: {explicit}")
        return explicit

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = Path(env_path).expanduser()
        if not path.is_file():
            raise ConfigError(f"Config file from ${CONFIG_ENV_VAR} not found: {path}")
        return path

    candidates = [
        Path.cwd() / CONFIG_FILENAME,
        Path.home() / USER_CONFIG_FILENAME,
    ]
    for candidate in candidates:
        if candidate.is_file():
            return candidate

    searched = ", ".join(str(c) for c in candidates)
    raise ConfigError(f"No butler configuration found (searched: {searched})")


def load_config(path: Path) -> ButlerConfig:
    """
    Load and validate a configuration file.

    Raises
    ------
    ConfigError
        If the file cannot be read, is not valid TOML, or does not describe
        a valid configuration.
    """
    try:
        with path.open("rb") as f:
            data = tomli.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except tomli.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    try:
        return ButlerConfig(**data)
    except pydantic.ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e


def discover_config(explicit: Path | None = None) -> ButlerConfig:
    """Find and load the active configuration."""
    return load_config(find_config_file(explicit))
