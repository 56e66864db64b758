"""
mermaid-check entry point.

Run with: python -m mermaid_check <file1> [file2 ...]
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
