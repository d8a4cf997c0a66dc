"""Install command handling for the addons CLI."""

import sys

from addon_updater.cli_helpers import (
    exit_with_error,
    get_settings,
    load_database,
    map_exception_to_exit_code,
)
from addon_updater.common.constants import ExitCodes
from addon_updater.common.errors import AddonUpdaterError
from addon_updater.core.catalog import CatalogClient
from addon_updater.core.updater import AddonUpdater


class InstallCommand:
    """Installs new add-ons from their catalog pages."""

    @staticmethod
    def add_parser(subparsers) -> None:
        """Add install command parser to subparsers."""
        parser = subparsers.add_parser('install', help='Install new addons')
        parser.add_argument('urls', nargs='+', metavar='url', help='Catalog page URL of the addon')
        parser.set_defaults(func=InstallCommand.execute)

    @staticmethod
    def execute(args) -> None:
        """Install every URL that is not tracked yet."""
        settings = get_settings(args)
        db = load_database(args)
        try:
            db.check_folder()
        except AddonUpdaterError as exc:
            exit_with_error(str(exc), map_exception_to_exit_code(exc) or ExitCodes.ADDON_OPERATION_FAILED)

        updater = AddonUpdater(db, CatalogClient(timeout=settings.http_timeout()))
        try:
            summary = updater.install(args.urls)
        finally:
            db.save()
        if not summary.ok:
            sys.exit(ExitCodes.ADDON_OPERATION_FAILED)
