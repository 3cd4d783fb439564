"""
Register Discord Slash Commands
=================================

Registers :data:`COMMANDS` with Discord's REST API without starting the
bot.  The bot already syncs its commands on startup; this is for operators
who want to push or inspect registrations by hand.

Usage:
    python register_slash_commands.py --global
    python register_slash_commands.py --guild
    python register_slash_commands.py --list

Requirements:
    - DISCORD_BOT_TOKEN in .env
    - DISCORD_APPLICATION_ID in .env (or auto-detect from token)
    - Optional: DISCORD_GUILD_ID for guild-specific commands (faster update)
"""

from __future__ import annotations

import argparse
import base64
import binascii
import os
import sys
from typing import Any, Dict, List, Optional

import requests
from ..config import get_settings, load_env
from .command_registry import COMMANDS

DISCORD_API = "https://discord.com/api/v10"


def application_id_from_token(token: str) -> Optional[str]:
    """Decode the application ID from a bot token.

    Discord bot tokens are in format: base64(app_id).random.random
    """
    head = token.split(".")[0]
    try:
        decoded = base64.b64decode(head + "==").decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    return decoded if decoded.isdigit() else None


def commands_url(application_id: str, guild_id: Optional[int] = None) -> str:
    if guild_id:
        return f"{DISCORD_API}/applications/{application_id}/guilds/{guild_id}/commands"
    return f"{DISCORD_API}/applications/{application_id}/commands"


def register_commands(
    token: str,
    application_id: str,
    guild_id: Optional[int] = None,
    commands: Optional[List[Dict[str, Any]]] = None,
) -> List[Dict[str, Any]]:
    """Overwrite the registered commands with ``commands`` (default: COMMANDS).

    Uses the bulk overwrite route, so running it twice is harmless.

    Raises
    ------
    requests.HTTPError
        If Discord rejects the registration
    """
    response = requests.put(
        commands_url(application_id, guild_id),
        json=commands if commands is not None else COMMANDS,
        headers={"Authorization": f"Bot {token}", "Content-Type": "application/json"},
        timeout=10,
    )
    response.raise_for_status()
    return response.json()


def list_registered_commands(
    token: str, application_id: str, guild_id: Optional[int] = None
) -> List[Dict[str, Any]]:
    response = requests.get(
        commands_url(application_id, guild_id),
        headers={"Authorization": f"Bot {token}"},
        timeout=10,
    )
    response.raise_for_status()
    return response.json()


def main(argv: List[str] | None = None) -> int:
    load_env()

    ap = argparse.ArgumentParser(description="Register the bot's slash commands")
    group = ap.add_mutually_exclusive_group(required=True)
    group.add_argument("--global", dest="scope", action="store_const", const="global")
    group.add_argument("--guild", dest="scope", action="store_const", const="guild")
    group.add_argument("--list", dest="scope", action="store_const", const="list")
    args = ap.parse_args(argv)

    settings = get_settings()
    token = settings.discord_bot_token
    if not token:
        print("[ERROR] DISCORD_BOT_TOKEN not found in .env")
        return 1

    application_id = os.getenv("DISCORD_APPLICATION_ID") or application_id_from_token(
        token
    )
    if not application_id:
        print("[ERROR] Could not auto-detect APPLICATION_ID")
        print("[INFO] Please set DISCORD_APPLICATION_ID in .env")
        return 1

    guild_id = settings.discord_guild_id
    if args.scope == "guild" and not guild_id:
        print("[ERROR] DISCORD_GUILD_ID not set in .env")
        return 1

    try:
        if args.scope == "list":
            scopes = [None] + ([guild_id] if guild_id else [])
            for scope_guild in scopes:
                label = f"guild {scope_guild}" if scope_guild else "global"
                registered = list_registered_commands(token, application_id, scope_guild)
                print(f"{label} commands ({len(registered)}):")
                for cmd in registered:
                    print(f"  - /{cmd['name']} (ID: {cmd['id']})")
            return 0

        scope_guild = guild_id if args.scope == "guild" else None
        registered = register_commands(token, application_id, scope_guild)
    except requests.RequestException as e:
        print(f"[FAIL] {e}")
        return 1

    for cmd in registered:
        print(f"  [OK] /{cmd['name']} (ID: {cmd.get('id')})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
