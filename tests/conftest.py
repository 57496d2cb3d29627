"""
Pytest configuration and shared fixtures for Hello JSON API tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides app and client fixtures built from an explicit ServerConfig
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from fastapi.testclient import TestClient

from api.app import create_app
from core.config.runtime import ServerConfig


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def server_config():
    """Provide a default ServerConfig, independent of the environment."""
    return ServerConfig()


@pytest.fixture
def app(server_config):
    """Provide an application built with the default route table."""
    return create_app(server_config)


@pytest.fixture
def client(app):
    """Provide a TestClient for the default application."""
    return TestClient(app)

