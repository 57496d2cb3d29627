"""
Runtime Configuration

Server configuration resolved once at process start and passed explicitly
into the application factory and the server entry point.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 5000
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_MAX_BODY_BYTES = 100 * 1024
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

PORT_ENV = "PORT"
LOG_LEVEL_ENV = "HELLO_LOG_LEVEL"
MAX_BODY_BYTES_ENV = "HELLO_MAX_BODY_BYTES"


def resolve_port(raw: Optional[str]) -> int:
    """
    Parse a port value, falling back to DEFAULT_PORT.

    Unset, non-numeric and out of range values all resolve to the default.
    """
    if raw is None or not raw.strip():
        return DEFAULT_PORT
    try:
        port = int(raw.strip())
    except ValueError:
        logger.warning(f"Ignoring non-numeric {PORT_ENV}={raw!r}, using {DEFAULT_PORT}")
        return DEFAULT_PORT
    if not 0 < port < 65536:
        logger.warning(f"Ignoring out of range {PORT_ENV}={port}, using {DEFAULT_PORT}")
        return DEFAULT_PORT
    return port


def _resolve_log_level(raw: Optional[str]) -> str:
    if not raw:
        return DEFAULT_LOG_LEVEL
    level = raw.strip().upper()
    if level not in LOG_LEVELS:
        logger.warning(f"Ignoring unknown {LOG_LEVEL_ENV}={raw!r}")
        return DEFAULT_LOG_LEVEL
    return level


def _resolve_max_body_bytes(raw: Optional[str]) -> int:
    if not raw:
        return DEFAULT_MAX_BODY_BYTES
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {MAX_BODY_BYTES_ENV}={raw!r}")
        return DEFAULT_MAX_BODY_BYTES
    if value <= 0:
        logger.warning(f"Ignoring non-positive {MAX_BODY_BYTES_ENV}={value}")
        return DEFAULT_MAX_BODY_BYTES
    return value


@dataclass(frozen=True)
class ServerConfig:
    """
    Bind address and request limits for the HTTP server.

    The host is a fixed loopback literal; only the port, log level and body
    size limit can be overridden from the environment.
    """
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServerConfig":
        """
        Build the configuration from environment variables.

        Supported variables:
        - PORT: listening port (default 5000)
        - HELLO_LOG_LEVEL: log level name (default INFO)
        - HELLO_MAX_BODY_BYTES: request body size limit in bytes (default 102400)
        """
        env = os.environ if environ is None else environ
        return cls(
            port=resolve_port(env.get(PORT_ENV)),
            log_level=_resolve_log_level(env.get(LOG_LEVEL_ENV)),
            max_body_bytes=_resolve_max_body_bytes(env.get(MAX_BODY_BYTES_ENV)),
        )

    def with_port(self, port: int) -> "ServerConfig":
        return replace(self, port=port)

    def with_log_level(self, log_level: str) -> "ServerConfig":
        return replace(self, log_level=log_level.upper())

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"
