"""Shared test fixtures for ocidist.

Provides fixtures for isolated config environments, output state, and
running CLI commands. Discovered automatically by pytest.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from ocidist.models import ClientConfig
from ocidist.output import OutputFormat, OutputManager, reset_output, set_output

HOST = "http://localhost"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches sys.stdout/sys.stderr at creation time; when
    CliRunner swaps those streams the cached references go stale.
    """
    yield
    reset_output()


@pytest.fixture(autouse=True)
def _no_proxy_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep proxy variables from redirecting mocked registry traffic."""
    for var in ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "NO_PROXY"):
        monkeypatch.delenv(var, raising=False)
        monkeypatch.delenv(var.lower(), raising=False)


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points the XDG directories at tmp_path, forces the XDG code path, and
    clears every OCIDIST_* environment variable.

    Returns:
        The tmp_path root directory.
    """
    monkeypatch.setattr("ocidist.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in [
        "OCIDIST_ENDPOINT",
        "OCIDIST_USERNAME",
        "OCIDIST_PASSWORD",
        "OCIDIST_TOKEN",
    ]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def basic_config() -> ClientConfig:
    return ClientConfig(endpoint=HOST, username="user", password="pass")


@pytest.fixture
def token_config() -> ClientConfig:
    return ClientConfig(endpoint=HOST, token="tok")


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet PLAIN OutputManager for tests that ignore output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
