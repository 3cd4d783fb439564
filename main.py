"""CLI entry point for the OI bot.

.. code-block:: bash

    # Connect to Discord and serve /oi
    python main.py

    # Print one report as JSON without connecting to Discord
    python main.py --report

This file does not implement any runtime logic itself; it simply
dispatches to :mod:`oi_bot.runner`.
"""

from __future__ import annotations

import sys

from oi_bot.runner import main

if __name__ == "__main__":
    sys.exit(main())
