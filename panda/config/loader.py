# panda/config/loader.py
"""
Configuration loader for panda.

Responsibilities:
- Load the stored config.yaml
- Expand ${ENV_VAR} placeholders
- Validate via schema
- Persist interactively captured values
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from panda.config.schema import PandaConfig
from panda.core.exceptions import ConfigError, ConfigNotFoundError
from panda.core.paths import PandaPaths
from panda.logging.logger import get_logger
from panda.logging.tags import CONFIG

logger = get_logger(__name__)


def _expand_env(value: Any) -> Any:
    if isinstance(value, str):
        return os.path.expandvars(value)
    if isinstance(value, dict):
        return {k: _expand_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env(v) for v in value]
    return value


def config_exists(path: Path | None = None) -> bool:
    return (path or PandaPaths.config()).is_file()


def load_config_dict(path: Path | None = None) -> dict:
    path = path or PandaPaths.config()
    if not path.exists():
        raise ConfigNotFoundError(f"No configuration found at {path}. Run 'panda init' first.")

    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Could not read {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping, got {type(data).__name__}")

    return _expand_env(data)


def load_config(path: Path | None = None) -> PandaConfig:
    """
    Load and validate the stored configuration.

    Raises:
        ConfigNotFoundError: If nothing has been stored yet.
        ConfigError: If the file is unreadable or fails validation.
    """
    path = path or PandaPaths.config()
    logger.debug(f"{CONFIG} Loading config from {path}")
    data = load_config_dict(path)

    try:
        return PandaConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}:\n{e}") from e


def save_config(config: PandaConfig, path: Path | None = None) -> Path:
    path = path or PandaPaths.config()
    path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json")
    try:
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, sort_keys=False, default_flow_style=False)
    except OSError as e:
        raise ConfigError(f"Could not write {path}: {e}") from e

    logger.debug(f"{CONFIG} Saved config to {path}")
    return path
