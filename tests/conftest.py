"""Shared fixtures: in-memory zip archives, settings and a fake catalog."""

from __future__ import annotations

import io
import os
import sys
import zipfile
from typing import Dict, Iterable, Tuple, Union

import pytest

# Ensure project root is on sys.path when the package is not installed
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from addon_updater.common.config import AddonSettings  # noqa: E402
from addon_updater.common.errors import DownloadError, VersionNotFoundError  # noqa: E402

Entries = Union[Dict[str, bytes], Iterable[Tuple[str, bytes]]]


def build_zip(entries: Entries) -> bytes:
    """Build a zip archive in memory. Names ending in '/' become directory entries."""
    items = entries.items() if isinstance(entries, dict) else entries
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, data in items:
            zf.writestr(zipfile.ZipInfo(name), data)
    return buffer.getvalue()


def build_corrupt_zip(name: str) -> bytes:
    """Build a one-entry deflated archive whose compressed payload is garbage."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        zf.writestr(name, bytes(range(256)) * 8, compress_type=zipfile.ZIP_DEFLATED)
    data = bytearray(buffer.getvalue())
    # Local file header is 30 bytes plus the name; the payload follows.
    start = 30 + len(name.encode("utf-8"))
    data[start:start + 20] = b"\xff" * 20
    return bytes(data)


class FakeCatalog:
    """Stands in for CatalogClient without any network access."""

    def __init__(self) -> None:
        self.versions: Dict[str, str] = {}
        self.archives: Dict[str, bytes] = {}
        self.downloads = []

    def publish(self, url: str, version: str, entries: Entries) -> None:
        self.versions[url] = version
        self.archives[url] = build_zip(entries)

    def get_version(self, url: str) -> str:
        if url not in self.versions:
            raise VersionNotFoundError("Could not get version.")
        return self.versions[url]

    def download(self, url: str) -> bytes:
        if url not in self.archives:
            raise DownloadError("Error 404")
        self.downloads.append(url)
        return self.archives[url]


@pytest.fixture
def make_zip():
    return build_zip


@pytest.fixture
def make_corrupt_zip():
    return build_corrupt_zip


@pytest.fixture
def addons_dir(tmp_path):
    folder = tmp_path / "AddOns"
    folder.mkdir()
    return folder


@pytest.fixture
def settings(tmp_path, addons_dir):
    return AddonSettings({
        "ADDONS_CONFIG_PATH": str(tmp_path / "config" / "addons.json"),
        "ADDONS_FOLDER": str(addons_dir),
    })


@pytest.fixture
def catalog():
    return FakeCatalog()
