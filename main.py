#!/usr/bin/env python3
"""Breach Log Analyzer - Entry point"""

import sys

from breachlog.cli import main


if __name__ == "__main__":
    sys.exit(main())
