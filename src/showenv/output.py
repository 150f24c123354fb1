"""User-facing message helpers for showenv.

Bridges print_*() calls with the THAC0 verbosity system so warnings and
errors respect -Q levels. Usage help itself is written directly to stdout.
"""

import sys

from showenv.lib.log_lib import get_output


def print_warn(msg):
    """Print a warning (hidden at -QQQ and quieter)."""
    get_output().warn(f"  [WARN] {msg}")


def print_error(msg):
    """Print an error message to stderr.

    Routes through OutputManager.error() which emits at level -3.
    Shown at all verbosity levels except hard wall (-QQQQ / -4).
    """
    try:
        get_output().error(f"  ERROR: {msg}")
    except (OSError, ValueError):
        print(f"  ERROR: {msg}", file=sys.stderr)
