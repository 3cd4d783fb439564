"""
OI Bot Discord Commands
========================

User-facing slash commands.
"""

from .command_registry import COMMANDS
from .embeds import create_oi_embed, format_currency
from .errors import fetch_failed_error
from .handlers import build_oi_report, handle_oi_command

__all__ = [
    "COMMANDS",
    "create_oi_embed",
    "format_currency",
    "fetch_failed_error",
    "build_oi_report",
    "handle_oi_command",
]
