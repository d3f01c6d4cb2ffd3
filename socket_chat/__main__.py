"""Allow running the client with ``python -m socket_chat``."""

import sys

from .presentation.cli import main

sys.exit(main())
