"""aiohttp Application factory.

Creates an application wired for the JSON helpers:
- Stores the Config where read_json finds its body limit
- Raises aiohttp's own body limit to match
- Installs access logging and helper error translation
- Configures the restful log handler when asked to

Routes are left to the caller.
"""

from __future__ import annotations

import logging

from aiohttp import web

from restful.access_log import access_log_middleware
from restful.config import DEFAULT_MAX_BODY_BYTES, Config
from restful.error_middleware import json_error_middleware
from restful.logging_config import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: Config | None = None) -> web.Application:
    """Create and configure the aiohttp application."""
    if config is None:
        config = Config.from_env()
    if config.configure_logging:
        setup_logging(config)
    logger.info("Configuration loaded")
    logger.info("  Max body bytes: %d", config.max_body_bytes)

    app = web.Application(
        # read_json enforces the configured limit with a DecodeError
        client_max_size=max(config.max_body_bytes, DEFAULT_MAX_BODY_BYTES),
        middlewares=[
            access_log_middleware,
            json_error_middleware,
        ],
    )
    app["config"] = config
    return app
