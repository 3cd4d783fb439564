"""
Discord Slash Command Registry
===============================

Defines the public-facing slash commands for the OI bot, in the raw shape
Discord's REST API accepts.  The bot registers the same commands through
discord.py's command tree on startup; ``register_slash_commands.py`` posts
these definitions directly.

Command Types:
- 1: CHAT_INPUT (slash command)
"""

from typing import Any, Dict, List

# Application command type for slash commands
COMMAND_TYPE_CHAT_INPUT = 1

OI_COMMAND_NAME = "oi"
OI_COMMAND_DESCRIPTION = "Get current open interest data for BTC, ETH, and Altcoins"

# All user-facing slash commands
COMMANDS: List[Dict[str, Any]] = [
    {
        "name": OI_COMMAND_NAME,
        "type": COMMAND_TYPE_CHAT_INPUT,
        "description": OI_COMMAND_DESCRIPTION,
    },
]
