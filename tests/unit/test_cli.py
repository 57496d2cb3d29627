"""
CLI Unit Tests
Tests for hello_cli/main.py and hello_cli/commands/

The server itself is never started: serve() and uvicorn.run() are replaced
with recorders.
"""
import os

import pytest

from hello_cli import main as cli_main
from hello_cli.commands import dev, start
from core.config.runtime import ServerConfig


@pytest.fixture
def served(monkeypatch):
    """Record configs passed to serve() by the start command."""
    calls = []
    monkeypatch.setattr(start, "serve", lambda config: calls.append(config))
    return calls


@pytest.fixture
def uvicorn_calls(monkeypatch):
    """Record uvicorn.run() calls made by the dev command."""
    calls = []
    monkeypatch.setattr(dev.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    return calls


@pytest.fixture
def clean_env(monkeypatch):
    monkeypatch.setenv("PORT", "")
    monkeypatch.setenv("HELLO_LOG_LEVEL", "INFO")
    monkeypatch.delenv("HELLO_MAX_BODY_BYTES", raising=False)


class TestStartCommand:
    """Tests for `hello-api start`."""

    def test_default_bind(self, served, clean_env):
        assert cli_main.main(["start"]) == 0

        assert served == [ServerConfig()]

    def test_port_from_environment(self, served, clean_env, monkeypatch):
        monkeypatch.setenv("PORT", "8080")

        assert cli_main.main(["start"]) == 0
        assert served[0].port == 8080
        assert served[0].host == "127.0.0.1"

    def test_port_flag_overrides_environment(self, served, clean_env, monkeypatch):
        monkeypatch.setenv("PORT", "8080")

        cli_main.main(["start", "--port", "9090", "--log-level", "debug"])

        assert served[0].port == 9090
        assert served[0].log_level == "DEBUG"

    def test_serve_failure_is_runtime_error(self, monkeypatch, clean_env, capsys):
        def fail(config):
            raise OSError("address already in use")

        monkeypatch.setattr(start, "serve", fail)

        assert cli_main.main(["start"]) == cli_main.EXIT_RUNTIME_ERROR
        assert "address already in use" in capsys.readouterr().err


class TestDevCommand:
    """Tests for `hello-api dev`."""

    def test_runs_factory_under_reloader(self, uvicorn_calls, clean_env):
        assert cli_main.main(["dev"]) == 0

        app, kwargs = uvicorn_calls[0]
        assert app == "api.app:create_app"
        assert kwargs["factory"] is True
        assert kwargs["reload"] is True
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 5000
        assert kwargs["reload_dirs"] is None

    def test_overrides_handed_to_worker_env(self, uvicorn_calls, clean_env):
        cli_main.main(["dev", "-p", "8000", "--reload-dir", "api", "--reload-dir", "core"])

        _, kwargs = uvicorn_calls[0]
        assert kwargs["port"] == 8000
        assert kwargs["reload_dirs"] == ["api", "core"]
        assert os.environ["PORT"] == "8000"


class TestParser:
    """Tests for argument parsing."""

    def test_no_command_prints_help(self, capsys):
        assert cli_main.main([]) == cli_main.EXIT_RUNTIME_ERROR
        assert "usage" in capsys.readouterr().out.lower()

    @pytest.mark.parametrize("value", ["http", "0", "70000"])
    def test_invalid_port_flag(self, value):
        with pytest.raises(SystemExit):
            cli_main.main(["start", "--port", value])
