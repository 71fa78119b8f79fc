"""Allow ``python -m prop_engine`` to run the command-line interface."""

import sys

from .cli import main

sys.exit(main())
