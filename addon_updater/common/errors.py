"""
Custom exception classes for the add-on updater.
"""


class AddonUpdaterError(Exception):
    """Base exception class for add-on updater errors."""
    pass


class InstallError(AddonUpdaterError):
    """Base class for failures of the archive installation engine."""
    pass


class ArchiveOpenError(InstallError):
    """Raised when the downloaded data is not a readable zip archive."""
    pass


class ConflictError(InstallError):
    """Raised when an archive folder already exists and belongs to someone else."""

    def __init__(self, folder: str) -> None:
        super().__init__(f"{folder} already exists")
        self.folder = folder


class CleanupIOError(InstallError):
    """Raised when removing a previously installed folder or file fails."""
    pass


class ExtractionIOError(InstallError):
    """Raised when writing archive contents to disk fails."""
    pass


class CorruptedAddonsDatabaseError(AddonUpdaterError):
    """Raised when the addons.json configuration file is corrupted."""
    pass


class AddonFolderNotSetError(AddonUpdaterError):
    """Raised when no add-on folder has been configured."""
    pass


class AddonFolderInvalidError(AddonUpdaterError):
    """Raised when the configured add-on folder is not a directory."""
    pass


class CatalogError(AddonUpdaterError):
    """Base class for failures talking to the add-on catalog."""
    pass


class DownloadError(CatalogError):
    """Raised when an HTTP request fails or returns a non-success status."""
    pass


class VersionNotFoundError(CatalogError):
    """Raised when the project page does not expose a version."""
    pass


class DownloadLinkNotFoundError(CatalogError):
    """Raised when the download page does not expose an archive link."""
    pass


class InvalidScheduleError(AddonUpdaterError):
    """Raised when the update cron expression cannot be parsed."""
    pass
