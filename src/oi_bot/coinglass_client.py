"""CoinGlass API client for derivative open-interest data.

Only the two public v2 endpoints the bot needs are wrapped:

- ``/openInterest?symbol=<SYM>``: open interest for one coin
- ``/openInterest/chart?time_type=<N>``: aggregate market open interest
  as a time series

API Documentation: https://coinglass.github.io/API-Reference/

Unlike most provider clients in this package, failures are raised rather
than swallowed: the caller decides what a failed fetch means.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from .logging_utils import get_logger

log = get_logger("coinglass_client")

DEFAULT_BASE_URL = "https://open-api.coinglass.com/public/v2"


class MarketDataError(Exception):
    """Base exception for market data retrieval failures"""
    pass


class CoinGlassError(MarketDataError):
    """Raised when a CoinGlass request fails or returns undecodable JSON"""
    pass


class CoinGlassClient:
    """Client for the CoinGlass open-interest endpoints."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        api_key: str = "",
        timeout: float = 10.0,
    ):
        """Initialize the client.

        Parameters
        ----------
        base_url : str
            API root, without trailing slash
        api_key : str
            Optional CoinGlass secret, sent as the ``coinglassSecret`` header
        timeout : float
            Per-request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        headers = {"accept": "application/json"}
        if self.api_key:
            headers["coinglassSecret"] = self.api_key
        return headers

    def _request(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET ``endpoint`` and return the decoded JSON body.

        Raises
        ------
        CoinGlassError
            On timeout, connection failure, non-2xx status, or invalid JSON
        """
        url = f"{self.base_url}{endpoint}"
        log.debug("coinglass_request endpoint=%s params=%s", endpoint, params)

        try:
            resp = requests.get(
                url, params=params, headers=self._headers(), timeout=self.timeout
            )
            resp.raise_for_status()
        except requests.exceptions.Timeout as e:
            raise CoinGlassError(f"timeout after {self.timeout}s: {endpoint}") from e
        except requests.exceptions.RequestException as e:
            raise CoinGlassError(f"request failed: {endpoint}: {e}") from e

        try:
            return resp.json()
        except ValueError as e:
            raise CoinGlassError(f"invalid JSON from {endpoint}") from e

    def get_open_interest(self, symbol: str) -> Any:
        """Open interest for a single coin (e.g. ``BTC``)."""
        return self._request("/openInterest", {"symbol": symbol.upper()})

    def get_open_interest_chart(self, time_type: str = "1") -> Any:
        """Aggregate market open interest series.

        ``time_type`` is the provider's interval selector; ``"1"`` is the
        hourly series, whose last point is the most recent sample.
        """
        return self._request("/openInterest/chart", {"time_type": time_type})
