"""
Constants and exit codes for the add-on updater.
"""


class ExitCodes:
    """Exit codes for different error conditions."""
    OK = 0
    CORRUPTED_ADDONS_DATABASE = 1
    ADDON_FOLDER_NOT_SET = 2
    ADDON_FOLDER_INVALID = 3
    ADDON_OPERATION_FAILED = 4
    INVALID_SCHEDULE = 5


# Configuration file location below the XDG config directory
CONFIG_DIR_NAME = 'addons'
CONFIG_FILE_NAME = 'addons.json'

# Well known add-on folders probed when creating a fresh configuration
MACOS_ADDON_FOLDER = '/Applications/World of Warcraft/Interface/Addons'
WINDOWS_ADDON_FOLDER = 'C:\\Program Files (x86)\\World of Warcraft\\Interface\\Addons'

DEFAULT_HTTP_TIMEOUT = 30.0
USER_AGENT = 'addon-updater/1.0'
