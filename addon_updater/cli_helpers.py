"""Shared CLI helpers for addons commands."""

import sys
from typing import NoReturn, Optional

from addon_updater.common.config import AddonSettings
from addon_updater.common.constants import ExitCodes
from addon_updater.common.errors import (
    AddonFolderInvalidError,
    AddonFolderNotSetError,
    AddonUpdaterError,
    CorruptedAddonsDatabaseError,
    InvalidScheduleError,
)
from addon_updater.core.addons import AddonDatabase


def exit_with_error(message: str, exit_code: int) -> NoReturn:
    """Print an error message and exit with the specified code."""
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(exit_code)


def map_exception_to_exit_code(exc: Exception) -> Optional[int]:
    """Translate known exceptions to addons exit codes."""
    if isinstance(exc, CorruptedAddonsDatabaseError):
        return ExitCodes.CORRUPTED_ADDONS_DATABASE
    if isinstance(exc, AddonFolderNotSetError):
        return ExitCodes.ADDON_FOLDER_NOT_SET
    if isinstance(exc, AddonFolderInvalidError):
        return ExitCodes.ADDON_FOLDER_INVALID
    if isinstance(exc, InvalidScheduleError):
        return ExitCodes.INVALID_SCHEDULE
    if isinstance(exc, AddonUpdaterError):
        return ExitCodes.ADDON_OPERATION_FAILED
    return None


def get_settings(args) -> AddonSettings:
    settings = getattr(args, "settings", None)
    if not isinstance(settings, AddonSettings):
        settings = AddonSettings()
    return settings


def load_database(args) -> AddonDatabase:
    """Load the add-on database, exiting with the mapped code on failure."""
    try:
        return AddonDatabase.from_settings(get_settings(args))
    except AddonUpdaterError as exc:
        exit_with_error(str(exc), map_exception_to_exit_code(exc) or ExitCodes.ADDON_OPERATION_FAILED)
