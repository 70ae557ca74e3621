#!/usr/bin/env python3
"""
Sheet Compare - Main Entry Point
Reconcile two spreadsheets keyed by an identifier column.
"""

import sys

from sheet_compare.cli import main


if __name__ == "__main__":
    sys.exit(main())
