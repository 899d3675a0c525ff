"""
Main entry point for running ymaster as a module.

Usage:
    python -m ymaster <command>
"""

from .app import main

if __name__ == "__main__":
    import sys

    sys.exit(main())
