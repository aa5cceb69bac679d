"""
Test the `starlesson` command without starting a server.
"""

import logging
import os

import pytest
from click.testing import CliRunner

from starlesson import cli
from starlesson.config import ApplicationConfig

OVERRIDES = ("STARLESSON_HOST", "STARLESSON_PORT", "STARLESSON_LOG_LEVEL")


@pytest.fixture
def uvicorn_calls(monkeypatch):
    """Records uvicorn.run calls along with the environment the server would see."""
    calls = []

    def fake_run(app, **kwargs):
        calls.append((app, kwargs, {name: os.environ.get(name) for name in OVERRIDES}))

    monkeypatch.setattr(cli.uvicorn, "run", fake_run)
    yield calls
    logging.basicConfig(level=logging.WARNING, force=True)


def invoke(args):
    # Unset the overrides during the run; CliRunner restores them afterwards
    return CliRunner().invoke(cli.main, args, env={name: None for name in OVERRIDES})


def test_cli_passes_options_to_uvicorn(uvicorn_calls):
    """Test that command line options reach uvicorn."""
    result = invoke(["--host", "0.0.0.0", "--port", "9000", "--reload", "--log-level", "debug"])
    assert result.exit_code == 0, result.output
    assert "http://0.0.0.0:9000/" in result.output
    app, kwargs, _ = uvicorn_calls[0]
    assert app == "starlesson.main:app"
    assert kwargs["host"] == "0.0.0.0"
    assert kwargs["port"] == 9000
    assert kwargs["reload"] is True
    assert kwargs["log_level"] == "debug"
    print("✓ CLI options work")


def test_cli_exports_overrides(uvicorn_calls):
    """Test that the server process rebuilds the same configuration."""
    result = invoke(["--host", "0.0.0.0", "--port", "9000", "--log-level", "debug"])
    assert result.exit_code == 0, result.output
    _, _, environ = uvicorn_calls[0]
    assert environ == {"STARLESSON_HOST": "0.0.0.0", "STARLESSON_PORT": "9000", "STARLESSON_LOG_LEVEL": "DEBUG"}

    rebuilt = ApplicationConfig.from_env(environ)
    assert rebuilt.web.host == "0.0.0.0"
    assert rebuilt.web.port == 9000
    assert rebuilt.logging.level == "DEBUG"
    print("✓ CLI overrides reach the server process")


def test_cli_reload_switch(uvicorn_calls, testing_config):
    """Test that --no-reload wins over a configuration that reloads."""
    testing_config.web.auto_reload = True

    assert invoke([]).exit_code == 0
    assert invoke(["--no-reload"]).exit_code == 0
    assert [kwargs["reload"] for _, kwargs, _ in uvicorn_calls] == [True, False]
    print("✓ Reload switch works")


def test_cli_defaults_from_config(uvicorn_calls, testing_config):
    """Test that host and port fall back to the configuration."""
    testing_config.web.port = 5555

    result = invoke([])
    assert result.exit_code == 0, result.output
    _, kwargs, _ = uvicorn_calls[0]
    assert kwargs["host"] == "localhost"
    assert kwargs["port"] == 5555
    assert kwargs["reload"] is False
    assert kwargs["log_level"] == "warning"
    print("✓ CLI defaults work")
