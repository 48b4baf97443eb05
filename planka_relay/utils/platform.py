"""Per-OS location of the relay's config directory."""

from __future__ import annotations

import os
import sys
from pathlib import Path

APP_DIR = "planka-relay"


def get_config_dir() -> Path:
    """``$PLANKA_RELAY_CONFIG_DIR``, else the OS config location for the relay."""
    override = os.environ.get("PLANKA_RELAY_CONFIG_DIR")
    if override:
        return Path(override)

    if sys.platform == "win32":
        roaming = os.environ.get("APPDATA") or Path.home() / "AppData" / "Roaming"
        return Path(roaming) / APP_DIR
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR
    xdg = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(xdg) / APP_DIR
