"""Entry point for ``python -m stabilized_intrinsics``."""

import sys

from stabilized_intrinsics.main import main

if __name__ == "__main__":
    sys.exit(main())
