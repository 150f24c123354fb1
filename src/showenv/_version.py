"""
Version information for showenv.

This file is the canonical source for version numbers. Release builds
may append build metadata to __version__.

Format: MAJOR.MINOR.PATCH[-PHASE][_BRANCH_BUILD-YYYYMMDD-COMMITHASH]
Example: 1.1.0-beta_dev_4-20261019-a1b2c3d4
"""

# Version components - edit these for version bumps
MAJOR = 1
MINOR = 0
PATCH = 0
PHASE = None  # None, "alpha", "beta", "rc1", etc.

__version__ = "1.0.0"
__app_name__ = "showenv"


def get_version():
    """Return the full version string including any build info."""
    return __version__


def get_base_version():
    """Return the semantic version string (MAJOR.MINOR.PATCH[-PHASE])."""
    if "_" in __version__:
        return __version__.split("_")[0]
    base = f"{MAJOR}.{MINOR}.{PATCH}"
    if PHASE:
        base = f"{base}-{PHASE}"
    return base


VERSION = get_version()
BASE_VERSION = get_base_version()
