"""Locate and read the bot's TOML config file."""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "DISPATCHBOT_CONFIG"
DEFAULT_CONFIG_PATH = Path("config.toml")


def resolve_config_path(path: str | Path | None = None) -> Path:
    """Explicit ``path``, else ``$DISPATCHBOT_CONFIG``, else ``./config.toml``."""

    if path is not None:
        return Path(path)
    env_path = os.getenv(CONFIG_PATH_ENV)
    return Path(env_path) if env_path else DEFAULT_CONFIG_PATH


def load_raw_config(path: str | Path | None = None) -> Dict[str, Any]:
    """
    Parse the config file into a dict.

    A missing default file yields ``{}`` so settings fall back to the
    environment. A file named explicitly (argument or env var) must exist.
    """

    target = resolve_config_path(path)
    if not target.is_file():
        if target is DEFAULT_CONFIG_PATH:
            return {}
        raise FileNotFoundError(f"Config file not found: {target}")

    with target.open("rb") as handle:
        raw = tomllib.load(handle)
    logger.debug("Loaded config from %s", target)
    return raw


__all__ = ["CONFIG_PATH_ENV", "DEFAULT_CONFIG_PATH", "load_raw_config", "resolve_config_path"]
