"""Allow ``python -m paper_toolkit``."""

import sys

from paper_toolkit.cli import main

if __name__ == "__main__":
    sys.exit(main())
