# Area: Shared
# PRD: docs/prd-turnflow.md
"""
turnflow._config — Session configuration
========================================

Configuration model, loading and validation for MatchSession.

Values come from (later wins):
    1. SessionConfig defaults
    2. An optional JSON config file
    3. A ``.env`` file in the working directory (python-dotenv)
    4. ``TURNFLOW_*`` environment variables
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from ._match.enums import QuitExclusion
from .errors import ConfigError

logger = logging.getLogger("turnflow.config")

# Required config keys (no sensible default exists)
REQUIRED_CONFIG_KEYS = [
    "local_player_id",
]

# Environment variable -> config key
ENV_MAPPINGS = {
    "TURNFLOW_LOCAL_PLAYER_ID": "local_player_id",
    "TURNFLOW_TURN_TIMEOUT_SECONDS": "turn_timeout_seconds",
    "TURNFLOW_EXCHANGE_TIMEOUT_SECONDS": "exchange_timeout_seconds",
    "TURNFLOW_QUIT_EXCLUSION": "quit_exclusion",
    "TURNFLOW_REMINDER_THROTTLE_RATIO": "reminder_throttle_ratio",
    "TURNFLOW_LOG_FILE": "log_file",
    "TURNFLOW_LOG_LEVEL": "log_level",
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class SessionConfig(BaseModel):
    """Settings of one MatchSession."""

    local_player_id: str = Field(min_length=1)
    turn_timeout_seconds: float = Field(default=600.0, gt=0)
    exchange_timeout_seconds: float = Field(default=120.0, gt=0)
    quit_exclusion: QuitExclusion = QuitExclusion.ON_CONFIRMATION
    reminder_throttle_ratio: float = Field(default=0.5, ge=0, le=1)
    log_file: str = "turnflow.log"
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level)


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """Load raw config values from file, .env and environment."""
    config: Dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            with open(path, encoding="utf-8") as f:
                config = json.load(f)
        else:
            logger.warning("Config file %s not found, using environment only", path)

    load_dotenv()

    for env_key, config_key in ENV_MAPPINGS.items():
        if env_key in os.environ:
            config[config_key] = os.environ[env_key]

    return config


def validate_config(config: Dict[str, Any]) -> SessionConfig:
    """
    Validate raw config values.

    Args:
        config: Configuration dict, e.g. from load_config()

    Returns:
        The validated SessionConfig

    Raises:
        ConfigError: If required keys are missing or a value is invalid
    """
    missing = [k for k in REQUIRED_CONFIG_KEYS if not config.get(k)]
    if missing:
        raise ConfigError(f"Missing required config keys: {missing}")

    try:
        return SessionConfig.model_validate(config)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigError(f"Invalid config: {problems}") from e
