"""OI bot package.

A Discord bot that answers ``/oi`` with a BTC, ETH and altcoin open interest
report built from CoinGlass data.
"""

__all__: list[str] = []
