"""Version information for qa-scaffold."""

__version__ = "0.1.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Release information
__title__ = "qa-scaffold"
__description__ = "Starter kit for Playwright end-to-end and HTTP API tests"
__author__ = "qa-scaffold contributors"
__license__ = "MIT"


def get_version() -> str:
    """Return the current version string."""
    return __version__
