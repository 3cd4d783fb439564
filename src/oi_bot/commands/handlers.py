"""
Discord Slash Command Handlers
===============================

Commands:
- /oi - BTC, ETH and altcoin open interest report
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional

import discord

from ..config import Settings, get_settings
from ..logging_utils import get_logger
from ..market_data import OpenInterestFetcher
from .embeds import create_oi_embed
from .errors import fetch_failed_error

log = get_logger("command_handlers")


def build_oi_report(
    fetcher: Optional[OpenInterestFetcher] = None,
    settings: Optional[Settings] = None,
) -> Dict[str, Any]:
    """
    Fetch open interest and build the report embed dict.

    Blocking: performs the provider requests on the calling thread.

    Parameters
    ----------
    fetcher : Optional[OpenInterestFetcher]
        Fetcher to use (default: one built from ``settings``)
    settings : Optional[Settings]
        Bot settings (default: read from the environment)

    Returns
    -------
    Dict[str, Any]
        Discord embed dict
    """
    settings = settings or get_settings()
    fetcher = fetcher or OpenInterestFetcher(settings=settings)
    snapshot = fetcher.fetch()
    return create_oi_embed(snapshot, mark_fallback=settings.mark_fallback)


async def handle_oi_command(
    interaction: discord.Interaction,
    fetcher: Optional[OpenInterestFetcher] = None,
    settings: Optional[Settings] = None,
) -> None:
    """
    Handle /oi command.

    The reply is deferred first so Discord does not expire the interaction
    while the provider calls run, then the deferred reply is edited with the
    report.  Any failure past the defer is logged and answered with an error
    message instead of propagating.
    """
    user_id = getattr(interaction.user, "id", None)
    log.info("slash_oi user_id=%s", user_id)

    await interaction.response.defer()

    try:
        embed = await asyncio.to_thread(build_oi_report, fetcher, settings)
        await interaction.edit_original_response(
            content=None, embed=discord.Embed.from_dict(embed)
        )
    except Exception as e:
        log.error("oi_command_failed user_id=%s err=%s", user_id, e, exc_info=True)
        try:
            await interaction.edit_original_response(**fetch_failed_error())
        except discord.HTTPException as reply_err:
            log.error("oi_error_reply_failed err=%s", reply_err)
