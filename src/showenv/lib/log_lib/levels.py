"""
THAC0 verbosity level constants.

The emit rule is ``message.level <= threshold``. The threshold is the
global verbosity unless the channel has its own override.

    ←── quieter ────────── default ────────── louder ──→
    -4    -3     -2       -1      0       1      2      3
    wall  errors warnings minimal default detail config debug
"""

# Louder (-v/-vv/-vvv)
DEBUG = 3          # Table layout, function tracing
CONFIG = 2         # Config resolution, section key splicing
DETAIL = 1         # Which sections rendered, sizes
DEFAULT = 0        # Normal output

# Quieter (-Q/-QQ/-QQQ/-QQQQ)
MINIMAL = -1       # Suppress informational notes
WARNING = -2       # Warnings still shown
ERROR = -3         # Errors only
NOTHING = -4       # Hard wall, exit code only
