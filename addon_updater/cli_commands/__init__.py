"""Registry for CLI subcommands."""

from .config_command import ConfigPathCommand
from .install_command import InstallCommand
from .list_command import ListCommand
from .remove_command import RemoveCommand
from .schedule_command import ScheduleCommand
from .update_command import UpdateCommand

COMMANDS = (
    InstallCommand,
    UpdateCommand,
    ListCommand,
    RemoveCommand,
    ScheduleCommand,
    ConfigPathCommand,
)

__all__ = [
    "COMMANDS",
    "ConfigPathCommand",
    "InstallCommand",
    "ListCommand",
    "RemoveCommand",
    "ScheduleCommand",
    "UpdateCommand",
]
