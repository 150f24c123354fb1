"""showenv — usage help with an Environment Variables section.

Demonstrates extending argparse usage help with custom sections through
an ordered, key-addressed section registry.
"""

from showenv._version import __version__, __app_name__

__all__ = ["__version__", "__app_name__"]
