"""Filesystem locations used by the openrpc-model CLI.

The decoder itself reads no configuration. The CLI only needs somewhere to
write crash logs, resolved the same way on every run:

* Linux/BSD: ``$XDG_DATA_HOME/openrpc-model/`` (default
  ``~/.local/share/openrpc-model/``).
* macOS/Windows: ``~/.openrpc-model/``.

Everything else the CLI honours comes from command-line flags and the
``NO_COLOR``/``TERM`` conventions handled in :mod:`openrpc_model.output`.
"""

from __future__ import annotations

import os
import platform
from pathlib import Path

_APP_NAME = "openrpc-model"


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_data_dir() -> Path:
    """Return the data directory, creating it if necessary.

    Returns:
        Absolute path to the data directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_logs_dir() -> Path:
    """Return the crash-log directory under :func:`get_data_dir`, creating it if necessary."""
    path = get_data_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path
