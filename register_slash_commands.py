"""
Register Discord Slash Commands
=================================

Thin wrapper around :mod:`oi_bot.commands.register`.

Usage:
    python register_slash_commands.py --guild    # instant, for testing
    python register_slash_commands.py --global   # may take a while to propagate
    python register_slash_commands.py --list
"""

import sys

from oi_bot.commands.register import main

if __name__ == "__main__":
    sys.exit(main())
