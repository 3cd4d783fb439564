"""Tests for the CoinGlass HTTP client."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from oi_bot.coinglass_client import CoinGlassClient, CoinGlassError, MarketDataError


def _response(payload=None, status=200, json_error=None):
    resp = MagicMock()
    resp.status_code = status
    if status >= 400:
        resp.raise_for_status.side_effect = requests.exceptions.HTTPError(
            f"{status} Server Error"
        )
    else:
        resp.raise_for_status.return_value = None
    if json_error is not None:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = payload
    return resp


class TestCoinGlassClient:
    def test_open_interest_request_shape(self):
        client = CoinGlassClient(base_url="https://api.test/v2/", timeout=10)

        with patch("oi_bot.coinglass_client.requests.get") as mock_get:
            mock_get.return_value = _response({"data": {"openInterest": 1}})
            payload = client.get_open_interest("btc")

        assert payload == {"data": {"openInterest": 1}}
        args, kwargs = mock_get.call_args
        assert args[0] == "https://api.test/v2/openInterest"
        assert kwargs["params"] == {"symbol": "BTC"}
        assert kwargs["timeout"] == 10
        assert "coinglassSecret" not in kwargs["headers"]

    def test_chart_request_shape(self):
        client = CoinGlassClient(base_url="https://api.test/v2")

        with patch("oi_bot.coinglass_client.requests.get") as mock_get:
            mock_get.return_value = _response({"data": []})
            client.get_open_interest_chart()

        args, kwargs = mock_get.call_args
        assert args[0] == "https://api.test/v2/openInterest/chart"
        assert kwargs["params"] == {"time_type": "1"}

    def test_api_key_sent_as_header(self):
        client = CoinGlassClient(api_key="s3cret")

        with patch("oi_bot.coinglass_client.requests.get") as mock_get:
            mock_get.return_value = _response({"data": {}})
            client.get_open_interest("ETH")

        assert mock_get.call_args.kwargs["headers"]["coinglassSecret"] == "s3cret"

    def test_timeout_raises_coinglass_error(self):
        client = CoinGlassClient(timeout=10)

        with patch("oi_bot.coinglass_client.requests.get") as mock_get:
            mock_get.side_effect = requests.exceptions.Timeout()
            with pytest.raises(CoinGlassError, match="timeout"):
                client.get_open_interest("BTC")

    def test_connection_error_raises(self):
        client = CoinGlassClient()

        with patch("oi_bot.coinglass_client.requests.get") as mock_get:
            mock_get.side_effect = requests.exceptions.ConnectionError("refused")
            with pytest.raises(MarketDataError):
                client.get_open_interest_chart()

    def test_http_error_status_raises(self):
        client = CoinGlassClient()

        with patch("oi_bot.coinglass_client.requests.get") as mock_get:
            mock_get.return_value = _response(status=503)
            with pytest.raises(CoinGlassError):
                client.get_open_interest("BTC")

    def test_malformed_json_raises(self):
        client = CoinGlassClient()

        with patch("oi_bot.coinglass_client.requests.get") as mock_get:
            mock_get.return_value = _response(json_error=ValueError("Expecting value"))
            with pytest.raises(CoinGlassError, match="invalid JSON"):
                client.get_open_interest("BTC")
