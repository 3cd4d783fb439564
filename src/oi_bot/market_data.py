"""
Open Interest Snapshot Fetcher
==============================

Pulls BTC, ETH and total-market open interest from CoinGlass and reduces the
three responses to an :class:`OpenInterestSnapshot`.

The fetch never raises.  If any of the three requests fails the whole
computation is dropped and :data:`FALLBACK_SNAPSHOT` is returned instead, so
the command always has numbers to show.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from .coinglass_client import CoinGlassClient, MarketDataError
from .config import Settings, get_settings
from .logging_utils import get_logger

log = get_logger("market_data")

# Field holding the notional value in CoinGlass payloads
OI_FIELD = "openInterest"

# Timestamp keys seen on time-series points, checked in order
_TIMESTAMP_KEYS = ("t", "time", "createTime", "timestamp")


@dataclass(frozen=True)
class OpenInterestSnapshot:
    """Open interest in USD for one fetch cycle."""

    btc: float
    eth: float
    alt: float
    total: float
    is_fallback: bool = field(default=False, compare=False)

    @classmethod
    def from_totals(cls, btc: float, eth: float, total: float) -> "OpenInterestSnapshot":
        """Build a snapshot, deriving ``alt`` as whatever is left of ``total``."""
        return cls(btc=btc, eth=eth, alt=max(0.0, total - btc - eth), total=total)


FALLBACK_SNAPSHOT = OpenInterestSnapshot(
    btc=39_800_000_000.0,  # $39.8b
    eth=25_500_000_000.0,  # $25.5b
    alt=30_200_000_000.0,  # $30.2b
    total=95_500_000_000.0,  # $95.5b
    is_fallback=True,
)


def _to_amount(value: Any) -> float:
    """Coerce a provider value to a non-negative float; junk becomes 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(amount) or amount < 0:
        return 0.0
    return amount


def _data(payload: Any) -> Any:
    if isinstance(payload, dict):
        return payload.get("data")
    return None


def parse_symbol_open_interest(payload: Any) -> float:
    """Read ``data.openInterest`` from a per-symbol response."""
    data = _data(payload)
    if not isinstance(data, dict):
        return 0.0
    return _to_amount(data.get(OI_FIELD))


def _timestamp(point: Any) -> Optional[float]:
    if not isinstance(point, dict):
        return None
    for key in _TIMESTAMP_KEYS:
        value = point.get(key)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            try:
                return float(value)
            except OverflowError:
                return None
    return None


def latest_point(points: Sequence[Any]) -> Any:
    """
    Pick the most recent point of a time series.

    Points are expected in chronological order, so the last one wins.  When
    every point carries a numeric timestamp the greatest timestamp is used
    instead, which also covers an out-of-order series.
    """
    if not points:
        return None
    stamps = [_timestamp(p) for p in points]
    if all(s is not None for s in stamps):
        # max() keeps the first of equal keys; iterate reversed so ties go to the later point
        return max(reversed(points), key=_timestamp)
    return points[-1]


def parse_total_open_interest(payload: Any) -> float:
    """Read ``openInterest`` from the latest point of the chart response."""
    data = _data(payload)
    if not isinstance(data, list):
        return 0.0
    point = latest_point(data)
    if not isinstance(point, dict):
        return 0.0
    return _to_amount(point.get(OI_FIELD))


class OpenInterestFetcher:
    """Fetches a fresh :class:`OpenInterestSnapshot` on every call."""

    def __init__(
        self,
        client: Optional[CoinGlassClient] = None,
        settings: Optional[Settings] = None,
    ):
        if client is None:
            settings = settings or get_settings()
            client = CoinGlassClient(
                base_url=settings.coinglass_api_base,
                api_key=settings.coinglass_api_key,
                timeout=settings.http_timeout,
            )
        self.client = client

    def _fetch_live(self) -> OpenInterestSnapshot:
        btc = parse_symbol_open_interest(self.client.get_open_interest("BTC"))
        eth = parse_symbol_open_interest(self.client.get_open_interest("ETH"))
        total = parse_total_open_interest(self.client.get_open_interest_chart("1"))
        return OpenInterestSnapshot.from_totals(btc=btc, eth=eth, total=total)

    def fetch(self) -> OpenInterestSnapshot:
        """Return live open interest, or :data:`FALLBACK_SNAPSHOT` on any fetch fault."""
        try:
            snapshot = self._fetch_live()
        except MarketDataError as e:
            log.warning("oi_fetch_failed err=%s", e)
            return FALLBACK_SNAPSHOT

        log.info(
            "oi_fetched btc=%.0f eth=%.0f alt=%.0f total=%.0f",
            snapshot.btc,
            snapshot.eth,
            snapshot.alt,
            snapshot.total,
        )
        return snapshot
