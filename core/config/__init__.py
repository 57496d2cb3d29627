"""
Runtime Configuration Module

Provides configuration loading for the Hello JSON API server.
"""

from .runtime import ServerConfig, resolve_port

__all__ = [
    "ServerConfig",
    "resolve_port",
]
