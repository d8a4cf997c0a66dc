"""Curse-style catalog client: version lookup and archive download."""

from __future__ import annotations

import html
import re
import urllib.error
import urllib.request
from typing import Optional
from urllib.parse import urljoin

from addon_updater.common.constants import DEFAULT_HTTP_TIMEOUT, USER_AGENT
from addon_updater.common.errors import (
    DownloadError,
    DownloadLinkNotFoundError,
    VersionNotFoundError,
)
from addon_updater.common.logging_config import get_logger

_NEWEST_FILE_PATTERN = re.compile(r'<li class="newest-file">Newest File: ([^<]+)</li>')
_EPOCH_PATTERN = re.compile(r'data-epoch="([0-9]+)"')
_DOWNLOAD_LINK_PATTERN = re.compile(r'data-href="([^"]+)"')


class CatalogClient:
    """Resolves the newest version of an add-on page and downloads its archive."""

    def __init__(self, timeout: float = DEFAULT_HTTP_TIMEOUT, user_agent: str = USER_AGENT) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._log = get_logger(__name__)

    def fetch(self, url: str) -> bytes:
        """Download ``url`` into memory.

        Raises:
            DownloadError: On a non-success status or a network failure
        """
        request = urllib.request.Request(url, headers={"User-Agent": self.user_agent})
        self._log.debug("GET %s", url)
        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:  # noqa: S310
                status: Optional[int] = getattr(response, "status", None)
                if status is not None and not 200 <= status < 300:
                    raise DownloadError(f"Error {status}")
                return response.read()
        except urllib.error.HTTPError as exc:
            raise DownloadError(f"Error {exc.code} {exc.reason}") from exc
        except (urllib.error.URLError, TimeoutError, ValueError) as exc:
            raise DownloadError(f"Could not fetch {url}: {exc}") from exc

    def fetch_text(self, url: str) -> str:
        return self.fetch(url).decode("utf-8", errors="replace")

    def get_version(self, page_url: str) -> str:
        """Return the version marker ``"<newest file> (<epoch>)"`` of an add-on page."""
        page = self.fetch_text(page_url)
        version = _NEWEST_FILE_PATTERN.search(page)
        date = _EPOCH_PATTERN.search(page)
        if version is None or date is None:
            raise VersionNotFoundError("Could not get version.")
        return f"{version.group(1)} ({date.group(1)})"

    def get_download_url(self, page_url: str) -> str:
        download_page = f"{page_url.rstrip('/')}/download"
        match = _DOWNLOAD_LINK_PATTERN.search(self.fetch_text(download_page))
        if match is None:
            raise DownloadLinkNotFoundError("Could not get download link.")
        return urljoin(download_page, html.unescape(match.group(1)))

    def download(self, page_url: str) -> bytes:
        """Download the newest archive of an add-on page."""
        archive_url = self.get_download_url(page_url)
        self._log.debug("Downloading %s from %s", page_url, archive_url)
        return self.fetch(archive_url)


__all__ = ["CatalogClient"]
