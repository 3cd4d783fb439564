"""Tests for the Discord client wiring."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from oi_bot.bot import OIBot, _log_unhandled_exception, run_bot
from oi_bot.config import ConfigError, Settings


def _http_exception():
    return discord.HTTPException(MagicMock(status=500, reason="Server Error"), "boom")


class TestOIBot:
    def test_oi_command_on_tree(self):
        bot = OIBot(Settings())
        command = bot.tree.get_command("oi")

        assert command is not None
        assert command.description == (
            "Get current open interest data for BTC, ETH, and Altcoins"
        )
        assert command.parameters == []

    def test_sync_global_only(self):
        bot = OIBot(Settings())
        bot.tree.sync = AsyncMock(return_value=[MagicMock()])
        bot.tree.copy_global_to = MagicMock()

        asyncio.run(bot.sync_commands())

        bot.tree.sync.assert_awaited_once_with()
        bot.tree.copy_global_to.assert_not_called()

    def test_sync_with_dev_guild(self, monkeypatch):
        monkeypatch.setenv("DISCORD_GUILD_ID", "555")
        bot = OIBot(Settings())
        bot.tree.sync = AsyncMock(return_value=[])
        bot.tree.copy_global_to = MagicMock()

        asyncio.run(bot.sync_commands())

        assert bot.tree.sync.await_count == 2
        guild = bot.tree.copy_global_to.call_args.kwargs["guild"]
        assert guild.id == 555

    def test_sync_failure_is_logged(self, caplog):
        bot = OIBot(Settings())
        bot.tree.sync = AsyncMock(side_effect=_http_exception())

        with caplog.at_level("ERROR", logger="oi_bot.bot"):
            asyncio.run(bot.sync_commands())

        assert "slash_command_sync_failed" in caplog.text

    def test_client_error_event_is_logged(self, caplog):
        bot = OIBot(Settings())

        async def _raise_and_report():
            try:
                raise RuntimeError("handler blew up")
            except RuntimeError:
                await bot.on_error("on_message")

        with caplog.at_level("ERROR", logger="oi_bot.bot"):
            asyncio.run(_raise_and_report())

        assert "discord_client_error event=on_message" in caplog.text
        assert "handler blew up" in caplog.text

    def test_app_command_error_is_logged(self, caplog):
        bot = OIBot(Settings())
        interaction = MagicMock()
        interaction.command.name = "oi"
        error = discord.app_commands.AppCommandError("bad")

        with caplog.at_level("ERROR", logger="oi_bot.bot"):
            asyncio.run(bot.tree.on_error(interaction, error))

        assert "app_command_error command=oi" in caplog.text


class TestProcessErrors:
    def test_unhandled_loop_exception_logged(self, caplog):
        with caplog.at_level("ERROR", logger="oi_bot.bot"):
            _log_unhandled_exception(
                MagicMock(),
                {"message": "Task exception was never retrieved", "exception": ValueError("x")},
            )

        assert "unhandled_async_error" in caplog.text


class TestRunBot:
    def test_missing_token_raises_before_connecting(self, monkeypatch):
        started = MagicMock()
        monkeypatch.setattr(OIBot, "start", started)

        with pytest.raises(ConfigError):
            asyncio.run(run_bot(Settings()))

        started.assert_not_called()
