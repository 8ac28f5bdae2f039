#!/usr/bin/env python3
"""
run.py - Main entry point for dropfour

Examples:
    python run.py play --players human,ai --depth 4
    python run.py play --players ai,ai --width 8 --height 7
    python run.py benchmark --depth 5 --iterations 3
"""

import sys

from dropfour.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
