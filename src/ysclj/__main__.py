"""
Entry point for module execution (``python -m ysclj``).

This module delegates execution to the CLI handler in ``ysclj.cli.__main__``.
"""

import sys
from ysclj.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
