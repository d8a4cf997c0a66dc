"""Configuration path command for the addons CLI."""

from addon_updater.cli_helpers import get_settings


class ConfigPathCommand:
    """Prints where the configuration file lives."""

    @staticmethod
    def add_parser(subparsers) -> None:
        parser = subparsers.add_parser('config-path', help='Show the configuration file path')
        parser.set_defaults(func=ConfigPathCommand.execute)

    @staticmethod
    def execute(args) -> None:
        print(get_settings(args).config_path())
