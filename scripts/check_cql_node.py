#!/usr/bin/env python3
"""
Standalone plugin script for Icinga/Nagios.
Drop into the plugin directory when the package is not installed.
"""

import sys
from pathlib import Path

# Add the src directory to the path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cql_node_check.checker import main


if __name__ == "__main__":
    sys.exit(main())
