"""Entry point for ``python -m sfrest``."""

from __future__ import annotations

import sys

from sfrest.cli import main

if __name__ == "__main__":
    sys.exit(main())
