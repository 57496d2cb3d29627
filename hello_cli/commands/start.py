"""
CLI Start Command

Production start: serve the API on the configured host and port.

Usage:
    hello-api start
    PORT=8080 hello-api start
"""

from __future__ import annotations

import logging
from argparse import Namespace

from api.app import serve
from core.config.runtime import ServerConfig


logger = logging.getLogger(__name__)


EXIT_SUCCESS = 0


def resolve_server_config(args: Namespace) -> ServerConfig:
    """Apply command-line overrides on top of the environment config."""
    config: ServerConfig = args.server_config
    if getattr(args, "port", None) is not None:
        config = config.with_port(args.port)
    if getattr(args, "log_level", None):
        config = config.with_log_level(args.log_level)
    return config


def start_cmd(args: Namespace) -> int:
    config = resolve_server_config(args)
    logger.info(f"Starting server on {config.base_url}")
    serve(config)
    return EXIT_SUCCESS
