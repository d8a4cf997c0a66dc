"""
Install and update orchestration.

Ties the catalog client, the add-on database and the installation engine
together. Add-ons are processed one after another; a failure is reported and
the next add-on is processed. A failed add-on keeps its previous version
marker and folders so the next run retries it.
"""

import io
import sys
from dataclasses import dataclass, field
from typing import Iterable, List

from addon_updater.common.errors import AddonUpdaterError
from addon_updater.common.logging_config import get_logger
from addon_updater.core.addons import AddonDatabase, AddonRecord
from addon_updater.core.catalog import CatalogClient
from addon_updater.core.installer import install_addon


@dataclass
class UpdateSummary:
    """Outcome of one install or update run."""

    succeeded: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


class AddonUpdater:
    """Installs new add-ons and updates tracked ones."""

    def __init__(self, database: AddonDatabase, client: CatalogClient) -> None:
        self.database = database
        self.client = client
        self._log = get_logger(__name__)

    def _report_error(self, url: str, exc: Exception) -> None:
        self._log.debug("Operation on %s failed", url, exc_info=exc)
        print(f"Error: {exc}", file=sys.stderr)

    def _install(self, record: AddonRecord, version: str) -> None:
        """Download the archive for ``record`` and install it over its owned folders."""
        data = self.client.download(record.url)
        folder = self.database.check_folder()
        with io.BytesIO(data) as stream:
            folders = install_addon(stream, folder, record.folders)
        print(f"-> {version}")
        record.folders = folders
        record.installed = version

    def install(self, urls: Iterable[str]) -> UpdateSummary:
        """Install add-ons that are not tracked yet."""
        summary = UpdateSummary()
        for url in urls:
            if self.database.is_installed(url):
                print(f"{url} is already installed.")
                summary.skipped.append(url)
                continue
            record = AddonRecord(url=url)
            try:
                version = self.client.get_version(url)
                print(f"Installing {url}")
                self._install(record, version)
            except AddonUpdaterError as exc:
                self._report_error(url, exc)
                summary.failed.append(url)
                continue
            self.database.add_addon(record)
            summary.succeeded.append(url)
        return summary

    def update_all(self) -> UpdateSummary:
        """Update every tracked add-on whose catalog version changed."""
        summary = UpdateSummary()
        for record in self.database.get_all_addons():
            try:
                version = self.client.get_version(record.url)
                if record.installed == version:
                    self._log.debug("%s is up to date (%s)", record.url, version)
                    summary.skipped.append(record.url)
                    continue
                print(f"Updating {record.url}")
                self._install(record, version)
            except AddonUpdaterError as exc:
                self._report_error(record.url, exc)
                summary.failed.append(record.url)
                continue
            summary.succeeded.append(record.url)
        self._log.info(
            "Update finished: %d updated, %d up to date, %d failed",
            len(summary.succeeded),
            len(summary.skipped),
            len(summary.failed),
        )
        return summary


__all__ = ["AddonUpdater", "UpdateSummary"]
