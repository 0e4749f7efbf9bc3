#!/usr/bin/env python3
"""
Entry point script for RoundTrip.

Usage:
    python run_roundtrip.py [N M] [--config PATH] [--batch] [--status] ...

Examples:
    python run_roundtrip.py                 # interactive prompt
    python run_roundtrip.py 4 6 --show 2
    python run_roundtrip.py --batch --resume
"""

import os
import sys

# Add current directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from roundtrip.cli import main


if __name__ == "__main__":
    sys.exit(main())
