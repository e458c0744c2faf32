#!/usr/bin/env python3
"""
run.py - Main entry point for the gamesearch command-line interface
"""

import sys

from gamesearch.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
