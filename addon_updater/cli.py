"""
Command Line Interface for the add-on updater.

Provides CLI commands for installing, updating and tracking add-ons.
"""

import argparse
import sys
from typing import List, Optional

from addon_updater.cli_commands import COMMANDS
from addon_updater.common.config import AddonSettings
from addon_updater.common.constants import ExitCodes
from addon_updater.common.logging_config import configure_logging


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog='addons',
        description='Install and update game addons from their catalog pages',
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')
    for command in COMMANDS:
        command.add_parser(subparsers)

    return parser


def print_help(parser: argparse.ArgumentParser, settings: AddonSettings) -> None:
    parser.print_help()
    print("")
    print("Your configuration is here:")
    print(settings.config_path())


def main(args: Optional[List[str]] = None, settings: Optional[AddonSettings] = None) -> None:
    """
    Main entry point for the CLI.

    Args:
        args: Command line arguments (uses sys.argv if None)
        settings: Settings to use instead of the process environment
    """
    configure_logging()
    settings = settings or AddonSettings()
    parser = create_parser()

    if args is None:
        args = sys.argv[1:]

    if not args:
        print_help(parser, settings)
        sys.exit(ExitCodes.OK)

    parsed_args = parser.parse_args(args)
    parsed_args.settings = settings

    if hasattr(parsed_args, 'func'):
        parsed_args.func(parsed_args)
    else:
        print_help(parser, settings)
        sys.exit(ExitCodes.OK)


if __name__ == '__main__':
    main()
