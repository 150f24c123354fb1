"""Allow ``python -m showenv``."""

import sys

from showenv.cli import main

sys.exit(main())
