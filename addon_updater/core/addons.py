"""
Add-on database for the updater.

Handles the addons.json configuration file:
* The shared add-on folder every archive is installed into
* One record per tracked add-on (catalog URL, installed version, owned folders)
* Loading, validating and persisting the JSON document
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from addon_updater.common.config import AddonSettings, discover_addon_folder
from addon_updater.common.errors import (
    AddonFolderInvalidError,
    AddonFolderNotSetError,
    CorruptedAddonsDatabaseError,
)
from addon_updater.common.logging_config import get_logger


@dataclass
class AddonRecord:
    """Represents one tracked add-on."""

    url: str
    installed: Optional[str] = None
    folders: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'url': self.url}
        if self.installed is not None:
            data['installed'] = self.installed
        data['folders'] = list(self.folders)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AddonRecord':
        installed = data.get('installed')
        folders = data.get('folders') or []
        if not isinstance(folders, list) or not all(isinstance(f, str) for f in folders):
            raise TypeError("'folders' must be a list of strings")
        return cls(
            url=str(data['url']),
            installed=None if installed is None else str(installed),
            folders=list(folders),
        )


class AddonDatabase:
    """Manages the add-on configuration file."""

    def __init__(self, database_path: Path, addon_folder_override: Optional[str] = None):
        """
        Load the add-on database, creating a default one if it is missing.

        Args:
            database_path: Path to the addons.json file
            addon_folder_override: Add-on folder to use instead of the stored one
        """
        self.database_path = Path(database_path)
        self.addon_folder = ''
        self._stored_folder = ''
        self.addons: List[AddonRecord] = []
        self._log = get_logger(__name__)
        if self.database_path.exists():
            self._load_database()
        else:
            self.addon_folder = self._stored_folder = discover_addon_folder()
            self.save()
            self._log.debug("Created new addons database at %s", self.database_path)
        if addon_folder_override:
            self.addon_folder = addon_folder_override

    @staticmethod
    def from_settings(settings: Optional[AddonSettings] = None) -> 'AddonDatabase':
        """Create a database instance from settings."""
        settings = settings or AddonSettings()
        return AddonDatabase(settings.config_path(), settings.addon_folder_override())

    def _load_database(self) -> None:
        """Load the database from the JSON file."""
        try:
            with open(self.database_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise CorruptedAddonsDatabaseError(
                f"{self.database_path} is corrupted and cannot be parsed: {e}. "
                "Fix or delete this file manually."
            ) from e

        if not isinstance(data, Mapping):
            raise CorruptedAddonsDatabaseError(
                f"{self.database_path} must contain a JSON object."
            )
        addon_folder = data.get('addon_folder', '')
        if not isinstance(addon_folder, str):
            raise CorruptedAddonsDatabaseError("'addon_folder' must be a string.")
        raw_addons = data.get('addons', [])
        if not isinstance(raw_addons, list):
            raise CorruptedAddonsDatabaseError("'addons' must be a JSON array of add-on objects.")

        addons: List[AddonRecord] = []
        for index, addon_data in enumerate(raw_addons):
            if not isinstance(addon_data, Mapping):
                raise CorruptedAddonsDatabaseError(
                    f"addons entry at index {index} must be a JSON object."
                )
            try:
                addons.append(AddonRecord.from_dict(dict(addon_data)))
            except (TypeError, KeyError) as e:
                raise CorruptedAddonsDatabaseError(
                    f"addons entry at index {index} is invalid: {e}."
                ) from e
        self.addon_folder = self._stored_folder = addon_folder
        self.addons = addons
        self._log.debug("Loaded %d addons", len(self.addons))

    def save(self) -> None:
        """Write the database to the JSON file."""
        data = {
            'addon_folder': self._stored_folder,
            'addons': [addon.to_dict() for addon in self.addons],
        }
        self.database_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.database_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)
        self._log.debug("Persisted %d addons", len(self.addons))

    def check_folder(self) -> Path:
        """
        Validate the configured add-on folder.

        Returns:
            The add-on folder as a path

        Raises:
            AddonFolderNotSetError: If no folder is configured
            AddonFolderInvalidError: If the folder is not a directory
        """
        if not self.addon_folder:
            raise AddonFolderNotSetError(
                f"You have to set your addons folder in {self.database_path}."
            )
        folder = Path(self.addon_folder)
        if not folder.is_dir():
            raise AddonFolderInvalidError(
                f"Your addons folder is not a directory: {self.addon_folder}"
            )
        return folder

    def is_installed(self, url: str) -> bool:
        return self.get_addon(url) is not None

    def get_addon(self, url: str) -> Optional[AddonRecord]:
        for addon in self.addons:
            if addon.url == url:
                return addon
        return None

    def get_all_addons(self) -> List[AddonRecord]:
        return list(self.addons)

    def add_addon(self, record: AddonRecord) -> None:
        """Track a new add-on. Records for an already tracked URL are replaced."""
        self.addons = [a for a in self.addons if a.url != record.url]
        self.addons.append(record)
        self._log.info("Tracking addon %s", record.url)

    def remove_addon(self, url: str) -> bool:
        before = len(self.addons)
        self.addons = [a for a in self.addons if a.url != url]
        if len(self.addons) != before:
            self._log.info("Stopped tracking addon %s", url)
            return True
        return False
