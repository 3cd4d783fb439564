"""
Discord client for the OI bot.

Owns the gateway connection and the slash command tree.  The client is
created and closed by :func:`run_bot`; nothing else holds a reference to it.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional

import discord
from discord import app_commands

from .commands.command_registry import OI_COMMAND_DESCRIPTION, OI_COMMAND_NAME
from .commands.handlers import handle_oi_command
from .config import Settings, get_settings
from .logging_utils import get_logger

log = get_logger("bot")


def _log_unhandled_exception(
    loop: asyncio.AbstractEventLoop, context: Dict[str, Any]
) -> None:
    """Event loop exception handler: log and keep running."""
    exc = context.get("exception")
    log.error(
        "unhandled_async_error msg=%s",
        context.get("message", "unknown"),
        exc_info=exc,
    )


class OICommandTree(app_commands.CommandTree):
    """Command tree that logs app command errors instead of printing them."""

    async def on_error(
        self, interaction: discord.Interaction, error: app_commands.AppCommandError
    ) -> None:
        command = interaction.command.name if interaction.command else "unknown"
        log.error(
            "app_command_error command=%s err=%s", command, error, exc_info=error
        )


class OIBot(discord.Client):
    """Discord client serving the ``/oi`` command."""

    def __init__(self, settings: Optional[Settings] = None, **kwargs: Any):
        intents = discord.Intents.default()
        intents.guilds = True
        intents.guild_messages = True
        super().__init__(intents=intents, **kwargs)

        self.settings = settings or get_settings()
        self.tree = OICommandTree(self)
        self._add_commands()

    def _add_commands(self) -> None:
        settings = self.settings

        @self.tree.command(name=OI_COMMAND_NAME, description=OI_COMMAND_DESCRIPTION)
        async def oi(interaction: discord.Interaction) -> None:
            await handle_oi_command(interaction, settings=settings)

    async def setup_hook(self) -> None:
        asyncio.get_running_loop().set_exception_handler(_log_unhandled_exception)
        await self.sync_commands()

    async def sync_commands(self) -> None:
        """Register the slash commands globally, and with the dev guild if configured.

        Syncing is idempotent.  A failure is logged; the bot stays up so the
        previously registered commands keep working.
        """
        try:
            guild_id = self.settings.discord_guild_id
            if guild_id:
                guild = discord.Object(id=guild_id)
                self.tree.copy_global_to(guild=guild)
                await self.tree.sync(guild=guild)
                log.info("slash_commands_synced scope=guild guild_id=%s", guild_id)

            synced = await self.tree.sync()
            log.info("slash_commands_synced scope=global count=%d", len(synced))
        except discord.HTTPException as e:
            log.error("slash_command_sync_failed err=%s", e)

    async def on_ready(self) -> None:
        log.info("bot_online user=%s", self.user)

    async def on_error(self, event_method: str, *args: Any, **kwargs: Any) -> None:
        log.exception("discord_client_error event=%s", event_method)


async def run_bot(settings: Optional[Settings] = None) -> None:
    """Connect to Discord and serve commands until the connection is closed.

    Raises
    ------
    ConfigError
        If no bot token is configured
    """
    settings = settings or get_settings()
    token = settings.require_bot_token()

    async with OIBot(settings) as client:
        await client.start(token)
