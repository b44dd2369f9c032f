"""Entry point for taskmaster when run as a module.

This allows the package to be run with: python -m taskmaster
"""

import sys

from taskmaster.cli import main

if __name__ == "__main__":
    sys.exit(main())
