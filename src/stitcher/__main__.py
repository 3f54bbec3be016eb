"""Allow ``python -m stitcher``."""
import sys

from stitcher.cli._dispatcher import main

if __name__ == "__main__":
    sys.exit(main())
