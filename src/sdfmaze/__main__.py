"""Allow ``python -m sdfmaze``."""

import sys

from sdfmaze.cli import main

sys.exit(main())
