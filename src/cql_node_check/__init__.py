"""Single-node CQL check for Icinga/Nagios."""

import sys


def main():
    """Main entry point for the package."""
    from .checker import main as checker_main
    sys.exit(checker_main())


# Package metadata
__version__ = "1.0.0"
__all__ = ['main']
