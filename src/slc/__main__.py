#!/usr/bin/env python3
"""
Allow running slc as a module: python -m slc
"""

from slc.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
