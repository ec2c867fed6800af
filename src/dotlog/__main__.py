"""Allow running dotlog as ``python -m dotlog``."""

import sys

from dotlog.cli import main

sys.exit(main())
