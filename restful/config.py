"""Configuration from environment variables and an optional env file.

Environment variables win. ``RESTFUL_ENV_FILE`` may point at a ``KEY=value``
file whose entries fill in anything the environment left unset.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_MAX_BODY_BYTES = 1024 * 1024


@dataclass
class Config:
    """JSON helper configuration."""

    # Largest request body read_json accepts
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"  # "text" or "json"
    configure_logging: bool = False  # create_app installs the restful log handler

    # Env file path
    env_file: str = ""

    @classmethod
    def from_env(cls) -> Config:
        """Load configuration from environment variables, falling back to the env file."""
        config = cls()

        max_body = os.environ.get("RESTFUL_MAX_BODY_BYTES", "")
        if max_body:
            _set_max_body_bytes(config, max_body, "RESTFUL_MAX_BODY_BYTES")

        config.log_level = os.environ.get("LOG_LEVEL", config.log_level).upper()
        config.log_format = os.environ.get("LOG_FORMAT", config.log_format).lower()
        config.configure_logging = (
            os.environ.get("RESTFUL_CONFIGURE_LOGGING", "false").lower() == "true"
        )

        env_file = os.environ.get("RESTFUL_ENV_FILE", "")
        if env_file and Path(env_file).exists():
            config.env_file = env_file
            _load_env_file(config, env_file)

        return config


def _set_max_body_bytes(config: Config, raw: str, source: str) -> None:
    try:
        value = int(raw)
    except ValueError:
        logger.warning(
            "Invalid %s, using default: %d", source, config.max_body_bytes
        )
        return
    if value <= 0:
        logger.warning(
            "%s must be positive, using default: %d", source, config.max_body_bytes
        )
        return
    config.max_body_bytes = value


def _load_env_file(config: Config, path: str) -> None:
    """Fill settings not already set by environment variables."""
    env: dict[str, str] = {}
    with open(path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, val = line.split("=", 1)
                env[key.strip()] = val.strip().strip('"').strip("'")

    if "RESTFUL_MAX_BODY_BYTES" not in os.environ and env.get("RESTFUL_MAX_BODY_BYTES"):
        _set_max_body_bytes(config, env["RESTFUL_MAX_BODY_BYTES"], path)
    if "LOG_LEVEL" not in os.environ and env.get("LOG_LEVEL"):
        config.log_level = env["LOG_LEVEL"].upper()
    if "LOG_FORMAT" not in os.environ and env.get("LOG_FORMAT"):
        config.log_format = env["LOG_FORMAT"].lower()

    logger.info("Loaded config from %s", path)
