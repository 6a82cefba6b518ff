"""Tests for openrpc_model.config -- XDG data and log directories."""

from __future__ import annotations

from pathlib import Path

import pytest

from openrpc_model.config import get_data_dir, get_logs_dir


# ---------------------------------------------------------------------------
# XDG path resolution
# ---------------------------------------------------------------------------


class TestXDGPathsLinux:
    """XDG paths on Linux (the default XDG platform)."""

    def test_data_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("openrpc_model.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        result = get_data_dir()
        assert result == tmp_path / ".local" / "share" / "openrpc-model"
        assert result.is_dir()

    def test_data_dir_xdg_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("openrpc_model.config._is_xdg_platform", lambda: True)
        custom = tmp_path / "custom_data"
        monkeypatch.setenv("XDG_DATA_HOME", str(custom))
        result = get_data_dir()
        assert result == custom / "openrpc-model"
        assert result.is_dir()

    def test_empty_env_var_uses_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("openrpc_model.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_DATA_HOME", "")
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        assert get_data_dir() == tmp_path / ".local" / "share" / "openrpc-model"


class TestNonXDGPaths:
    """macOS / Windows fall back to a dot directory under $HOME."""

    def test_fallback_dir(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("openrpc_model.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        result = get_data_dir()
        assert result == tmp_path / ".openrpc-model"
        assert result.is_dir()


class TestLogsDir:
    def test_logs_under_data_dir(self, isolated_data_dir: Path) -> None:
        result = get_logs_dir()
        assert result == isolated_data_dir / "openrpc-model" / "logs"
        assert result.is_dir()
