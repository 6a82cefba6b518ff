"""Shared test fixtures for openrpc-model.

Provides reusable fixtures for loading document fixtures, building small
documents inline, isolating the data directory, managing output state, and
running CLI commands. These fixtures are automatically discovered by pytest.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from openrpc_model.models import Document
from openrpc_model.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Raw document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_raw() -> dict[str, Any]:
    """Load the raw petstore document dict."""
    with open(FIXTURES_DIR / "petstore.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def petstore_text() -> str:
    """The petstore document as JSON text."""
    return (FIXTURES_DIR / "petstore.json").read_text(encoding="utf-8")


@pytest.fixture
def minimal_raw() -> dict[str, Any]:
    """A document holding only the required fields."""
    return {"openrpc": "1.2.6", "info": {"title": "T", "version": "1"}, "methods": []}


@pytest.fixture
def petstore_doc(petstore_text: str) -> Document:
    """Decoded petstore document."""
    from openrpc_model.parser import parse

    return parse(petstore_text)


# ---------------------------------------------------------------------------
# Data directory isolation
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the XDG data directory at tmp_path so crash logs stay local."""
    data_dir = tmp_path / "data"
    monkeypatch.setattr("openrpc_model.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_DATA_HOME", str(data_dir))
    return data_dir


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet PLAIN OutputManager for tests that don't care about output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
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
