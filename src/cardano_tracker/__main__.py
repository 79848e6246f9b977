"""Run the command line with ``python -m cardano_tracker``."""

import sys

from .cli import main

sys.exit(main())
