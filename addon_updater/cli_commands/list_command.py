"""List command handling for the addons CLI."""

from addon_updater.cli_helpers import load_database


class ListCommand:
    """Shows tracked add-ons."""

    @staticmethod
    def add_parser(subparsers) -> None:
        parser = subparsers.add_parser('list', help='List tracked addons')
        parser.set_defaults(func=ListCommand.execute)

    @staticmethod
    def execute(args) -> None:
        db = load_database(args)
        addons = db.get_all_addons()
        print(f"Addons folder: {db.addon_folder or '(not set)'}")
        if not addons:
            print("  No addons tracked.")
            return

        for addon in addons:
            version = addon.installed or "not installed"
            folders = ", ".join(addon.folders) or "-"
            print(f"  {addon.url}: {version} [{folders}]")
