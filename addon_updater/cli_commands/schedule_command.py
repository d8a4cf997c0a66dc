"""Update scheduler command handling for the addons CLI."""

from addon_updater.cli_helpers import exit_with_error, get_settings
from addon_updater.common.constants import ExitCodes
from addon_updater.common.errors import InvalidScheduleError
from addon_updater.core.update_scheduler import CronSchedule, run_scheduler


class ScheduleCommand:
    """Runs the update scheduler loop."""

    @staticmethod
    def add_parser(subparsers) -> None:
        parser = subparsers.add_parser(
            'schedule',
            help='Update all addons on the ADDONS_UPDATE_CRON schedule',
        )
        parser.set_defaults(func=ScheduleCommand.execute)

    @staticmethod
    def execute(args) -> None:
        settings = get_settings(args)
        expression = settings.update_cron()
        if expression:
            try:
                CronSchedule(expression)
            except InvalidScheduleError as exc:
                exit_with_error(
                    f"Invalid ADDONS_UPDATE_CRON expression '{expression}': {exc}",
                    ExitCodes.INVALID_SCHEDULE,
                )
        run_scheduler(settings)
