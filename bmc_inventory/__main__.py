"""
Main entry point for running the package directly.

    python -m bmc_inventory --host 10.0.0.5
"""

import sys

from bmc_snapshot import main

if __name__ == "__main__":
    sys.exit(main())
