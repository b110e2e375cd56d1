"""Entry point for running the checker as a module."""

import sys

from .checker import main

if __name__ == "__main__":
    sys.exit(main())
