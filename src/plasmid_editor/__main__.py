#!/usr/bin/env python3
"""
Main entry point for running Plasmid Editor as a module.
"""

import sys

from .main import main

if __name__ == "__main__":
    sys.exit(main())
