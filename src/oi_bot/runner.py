# -*- coding: utf-8 -*-
"""OI bot runner."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import List

import discord
from .bot import run_bot
from .commands.handlers import build_oi_report
from .config import ConfigError, get_settings, load_env
from .logging_utils import get_logger, setup_logging

log = get_logger("runner")


def print_report() -> int:
    """Fetch once and print the report embed as JSON, without Discord."""
    report = build_oi_report(settings=get_settings())
    sys.stdout.write(json.dumps(report, indent=2, ensure_ascii=False) + "\n")
    return 0


def runner_main() -> int:
    settings = get_settings()
    try:
        asyncio.run(run_bot(settings))
    except ConfigError as e:
        log.critical("startup_failed err=%s", e)
        return 2
    except discord.LoginFailure as e:
        log.critical("discord_login_failed err=%s", e)
        return 2
    except KeyboardInterrupt:
        log.info("shutdown_requested")
    except Exception:
        log.critical("bot_crashed", exc_info=True)
        return 1
    return 0


def main(argv: List[str] | None = None) -> int:
    """
    Entry point for the OI bot.

    ``--report`` prints a single report to stdout and exits; otherwise the
    bot connects to Discord and runs until interrupted.
    """
    load_env()

    ap = argparse.ArgumentParser(description="Discord open interest bot")
    ap.add_argument(
        "--report",
        action="store_true",
        help="Fetch once and print the report embed as JSON, then exit",
    )
    ap.add_argument(
        "--log-level",
        default=None,
        help="Override LOG_LEVEL (DEBUG, INFO, WARNING, ...)",
    )
    args = ap.parse_args(argv)

    setup_logging(args.log_level)

    if args.report:
        return print_report()
    return runner_main()


if __name__ == "__main__":
    sys.exit(main())
