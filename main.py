"""Main entry point for the hospital verifier.

For CLI usage, use: hospitalverify <name> --location <location>
Or run directly: python main.py <name> --location <location>
"""

import sys

from hospitalverify.interfaces.cli.cli import main

if __name__ == "__main__":
    sys.exit(main())
