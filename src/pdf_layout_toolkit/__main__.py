"""Run the command line with ``python -m pdf_layout_toolkit``."""

import sys

from pdf_layout_toolkit.cli import main

if __name__ == "__main__":
    sys.exit(main())
