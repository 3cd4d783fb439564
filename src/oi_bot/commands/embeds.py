"""
Discord Embed Templates
========================

Builds the ``/oi`` report embed as a plain dict (Discord's embed JSON), so
it can be tested without a client and converted with
``discord.Embed.from_dict`` at send time.

Color Codes:
- Blue (neutral): 0x3498DB
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..market_data import OpenInterestSnapshot

COLOR_NEUTRAL = 0x3498DB  # Blue

REPORT_TITLE = "📊 Altcoin/BTC OI Report"
DATA_SOURCE = "Data from CoinGlass"
FALLBACK_NOTE = "estimated (live data unavailable)"


def format_currency(amount: float) -> str:
    """
    Scale a USD amount to a short string.

    >>> format_currency(39_800_000_000)
    '$39.8b'
    >>> format_currency(999)
    '$999.00'

    Rounding is Python's ``format`` rounding (nearest, ties to even on the
    binary value), so 999_999 renders as ``$1000.0k`` rather than ``$1.0m``.
    """
    if amount >= 1e9:
        return f"${amount / 1e9:.1f}b"
    if amount >= 1e6:
        return f"${amount / 1e6:.1f}m"
    if amount >= 1e3:
        return f"${amount / 1e3:.1f}k"
    return f"${amount:.2f}"


def create_oi_embed(
    snapshot: OpenInterestSnapshot,
    mark_fallback: bool = False,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Create the open interest report embed.

    Parameters
    ----------
    snapshot : OpenInterestSnapshot
        Values to display
    mark_fallback : bool
        Note in the footer when ``snapshot`` is the fallback snapshot
    now : Optional[datetime]
        Generation time (default: current UTC time)

    Returns
    -------
    Dict[str, Any]
        Discord embed dict
    """
    footer = f"Total OI: {format_currency(snapshot.total)} | {DATA_SOURCE}"
    if mark_fallback and snapshot.is_fallback:
        footer += f" | {FALLBACK_NOTE}"

    generated_at = now or datetime.now(timezone.utc)

    return {
        "title": REPORT_TITLE,
        "color": COLOR_NEUTRAL,
        "fields": [
            {"name": "BTC OI", "value": format_currency(snapshot.btc), "inline": True},
            {"name": "ETH OI", "value": format_currency(snapshot.eth), "inline": True},
            {
                "name": "Altcoin OI",
                "value": format_currency(snapshot.alt),
                "inline": True,
            },
        ],
        "footer": {"text": footer},
        "timestamp": generated_at.isoformat(),
    }
