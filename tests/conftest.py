"""Shared test fixtures for apidocgen.

Provides reusable fixtures for loading the sample document, isolating the
XDG directories that hold scratch state, managing output state, and running
the CLI. These fixtures are automatically discovered by pytest.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from apidocgen.models import GenerationConfig
from apidocgen.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When CliRunner redirects those streams during a test
    the cached references go stale once the test finishes.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def swagger_raw() -> dict[str, Any]:
    """Load the sample swagger.json as a dict."""
    with open(FIXTURES_DIR / "swagger.json") as f:
        return json.load(f)


@pytest.fixture
def swagger_file() -> Path:
    """Path to the sample swagger.json."""
    return FIXTURES_DIR / "swagger.json"


@pytest.fixture
def generation_config() -> GenerationConfig:
    """A config for the sample document that neither formats nor reveals."""
    return GenerationConfig(
        source_url="http://localhost:5033/swagger/v1/swagger.json",
        base_path="/api/",
        format_output=False,
        reveal_output=False,
    )


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate scratch and data directories to a temporary directory.

    Sets XDG_CACHE_HOME and XDG_DATA_HOME to subdirectories of tmp_path,
    clears all APIDOCGEN_* environment variables and changes the working
    directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("apidocgen.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    for var in [
        "APIDOCGEN_SWAGGER",
        "APIDOCGEN_BASE_PATH",
        "APIDOCGEN_OUTPUT",
    ]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager for the duration of a test."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True, no_color=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
