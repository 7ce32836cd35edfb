"""Utility helpers: XDG paths, JSON and log file helpers, app configuration."""

from __future__ import annotations

import json
import os
from pathlib import Path

from .errors import SettingsError
from .models import Settings


APP_NAME = "dockswitch"
LOG_FILE_NAME = "display-setup.log"


def config_dir() -> Path:
    """Return ~/.config/dockswitch, creating it if needed."""
    base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    d = base / APP_NAME
    d.mkdir(parents=True, exist_ok=True)
    return d


def state_dir() -> Path:
    """Return ~/.local/state/dockswitch, creating it if needed."""
    base = Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))
    d = base / APP_NAME
    d.mkdir(parents=True, exist_ok=True)
    return d


def default_log_file() -> Path:
    return state_dir() / LOG_FILE_NAME


def read_json(path: Path) -> dict | list | None:
    """Read and parse a JSON file, returning None on failure."""
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return None


def append_text(path: Path, text: str) -> None:
    """Append text to a file, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as f:
        f.write(text)


def _settings_path() -> Path:
    """Return the path to the global app settings file."""
    return config_dir() / "settings.json"


def load_app_settings(path: Path | None = None) -> Settings:
    """Load global application settings.

    A missing settings file yields the defaults. A file that exists but is
    not a JSON object raises SettingsError.
    """
    path = path or _settings_path()
    if not path.exists():
        return Settings()
    data = read_json(path)
    if not isinstance(data, dict):
        raise SettingsError(f"{path} is not a valid JSON object")
    return Settings.from_dict(data)
