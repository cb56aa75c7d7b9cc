"""
Global Configuration and Defaults.

This module centralizes the constants shared by the graph engine and the
CLI, and loads the optional user configuration from `.depspy/config.yaml`.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

# --- Export Markers ---
# Pseudo export standing for "the module is evaluated at all"
SIDE_EFFECT_NAME = "__$$sideEffect"

# An imported name of "*" means any change to that import affects the export
WILDCARD_IMPORT = "*"

# --- Tree Limits ---
# Levels materialized eagerly before nodes are left collapsed
DEFAULT_MAX_LEVEL = 3

# --- Locations ---
DEFAULT_CONFIG_PATH = Path(".depspy/config.yaml")
DEFAULT_RECORDS_FILE = ".depspy/modules.json"

LOG_LEVEL_ENV = "DEPSPY_LOG_LEVEL"


class DepSpyConfig(BaseModel):
    """User configuration for tree exploration."""
    max_level: int = Field(default=DEFAULT_MAX_LEVEL, ge=1)
    reverse: bool = False
    records_file: str = DEFAULT_RECORDS_FILE
    log_level: str = "WARNING"

    model_config = ConfigDict(extra="ignore")

    @field_validator("log_level")
    @classmethod
    def normalize_level(cls, value: str) -> str:
        value = value.upper()
        if value not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level: {value}")
        return value


def load_config(config_path: Optional[Path] = None) -> DepSpyConfig:
    """
    Load configuration from YAML, falling back to defaults.

    A missing file is not an error. The `DEPSPY_LOG_LEVEL` environment
    variable overrides the configured log level.

    Args:
        config_path (Optional[Path]): Location of the YAML file.

    Returns:
        DepSpyConfig: The merged configuration.
    """
    path = config_path or DEFAULT_CONFIG_PATH
    data = {}

    if path.exists():
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            logger.warning("Ignoring config %s: expected a mapping", path)
            data = {}

    env_level = os.getenv(LOG_LEVEL_ENV)
    if env_level:
        data["log_level"] = env_level

    try:
        return DepSpyConfig(**data)
    except ValidationError as e:
        logger.warning("Invalid config %s, using defaults: %s", path, e)
        return DepSpyConfig()
