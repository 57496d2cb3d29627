"""
Module execution entry point.

Allows running with: python -m hello_cli
"""

import sys
from hello_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
