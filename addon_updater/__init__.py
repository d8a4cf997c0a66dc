"""Addon Updater - install and update game add-ons from a catalog.

Provides:
* A safe zip installation engine that tracks which top-level folders each
  add-on owns
* A JSON add-on database and a Curse-style catalog client
* A thin CLI wrapper (`addons`)

Public helpers exported here are considered part of the semi-stable API. The
CLI remains the primary user interface.
"""

from ._version import __version__
from .common.logging_config import configure_logging  # noqa: F401
from .core.addons import AddonDatabase, AddonRecord  # noqa: F401
from .core.catalog import CatalogClient  # noqa: F401
from .core.installer import install_addon, sanitize_path, scan_owned_folders  # noqa: F401
from .core.updater import AddonUpdater  # noqa: F401

__all__ = [
	"__version__",
	"configure_logging",
	"AddonDatabase",
	"AddonRecord",
	"CatalogClient",
	"install_addon",
	"sanitize_path",
	"scan_owned_folders",
	"AddonUpdater",
]
