#!/usr/bin/env python3
"""Script to run reporter commands from a source checkout."""

import sys
import os

# Add the project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from reporter.cli import main


if __name__ == "__main__":
    sys.exit(main())
