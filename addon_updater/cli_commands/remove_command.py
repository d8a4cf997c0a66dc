"""Remove command handling for the addons CLI."""

from addon_updater.cli_helpers import load_database


class RemoveCommand:
    """Stops tracking an add-on. Installed files are left in place."""

    @staticmethod
    def add_parser(subparsers) -> None:
        parser = subparsers.add_parser('remove', help='Stop tracking an addon (files are kept)')
        parser.add_argument('url', help='Catalog page URL of the addon')
        parser.set_defaults(func=RemoveCommand.execute)

    @staticmethod
    def execute(args) -> None:
        db = load_database(args)
        if db.remove_addon(args.url):
            db.save()
            print(f"Removed '{args.url}' successfully.")
        else:
            print(f"'{args.url}' was not found in the database.")
