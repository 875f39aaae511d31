#!/usr/bin/env python3
"""
Bank Ledger Entry Point

Runs the demo scenario against an in-memory ledger and prints the report.
"""

import sys

from bank_ledger.demo import main


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(130)
