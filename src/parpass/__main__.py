"""
Main entry point for the ParPass client.
"""

import sys
from parpass.cli import main

if __name__ == "__main__":
    sys.exit(main())
