"""Configuration resolution for the add-on updater.

Everything is environment driven so tests can inject a plain mapping:

* `ADDONS_CONFIG_PATH` - location of the addons.json database
* `ADDONS_FOLDER` - overrides the add-on folder stored in the database
* `ADDONS_HTTP_TIMEOUT` - timeout in seconds for catalog requests
* `ADDONS_UPDATE_CRON` - cron expression used by the `schedule` command
"""

import os
import sys
from pathlib import Path
from typing import Mapping, Optional

from .constants import (
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    DEFAULT_HTTP_TIMEOUT,
    MACOS_ADDON_FOLDER,
    WINDOWS_ADDON_FOLDER,
)


def discover_addon_folder(platform: Optional[str] = None) -> str:
    """Return the default add-on folder for this platform if it exists, else ''."""
    platform = platform or sys.platform
    candidate = MACOS_ADDON_FOLDER if platform == 'darwin' else WINDOWS_ADDON_FOLDER
    if Path(candidate).is_dir():
        return candidate
    return ''


class AddonSettings:
    """Resolve environment-backed configuration for the updater."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self._environ = os.environ if environ is None else environ

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._environ.get(key, default)

    def config_path(self) -> Path:
        override = self.get("ADDONS_CONFIG_PATH")
        if override:
            return Path(override)
        base = self.get("XDG_CONFIG_HOME") or os.path.join(os.path.expanduser("~"), ".config")
        return Path(base) / CONFIG_DIR_NAME / CONFIG_FILE_NAME

    def addon_folder_override(self) -> Optional[str]:
        return self.get("ADDONS_FOLDER") or None

    def http_timeout(self) -> float:
        raw = self.get("ADDONS_HTTP_TIMEOUT")
        if not raw:
            return DEFAULT_HTTP_TIMEOUT
        try:
            value = float(raw)
        except ValueError:
            return DEFAULT_HTTP_TIMEOUT
        return value if value > 0 else DEFAULT_HTTP_TIMEOUT

    def update_cron(self) -> str:
        return (self.get("ADDONS_UPDATE_CRON", "") or "").strip()
