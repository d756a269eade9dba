"""
Entry point for module execution (``python -m v0_rails``).

This module delegates execution to the CLI handler in ``v0_rails.cli.__main__``.
"""

import sys

from v0_rails.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
