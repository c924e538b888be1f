"""
Crypto Exchange Integration

Provides the adapter used to fetch account balances and market prices.
Uses CCXT library for exchange API access.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import urlsplit

import ccxt

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Raised when an exchange request fails."""


@dataclass
class Balance:
    """Represents an asset balance as reported by the exchange."""

    asset: str  # Asset code (BTC, ETH, USD, etc.)
    free: str  # Available amount, unparsed
    locked: str  # Amount locked in orders, unparsed


@dataclass
class Ticker:
    """Latest price for a market trading pair."""

    symbol: str  # Exchange market id (BTCUSD, ETHBTC, etc.)
    price: str  # Last price, unparsed


def parse_amount(value: Optional[str]) -> float:
    """Parse an exchange numeric string, treating malformed values as 0.0."""
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.debug(f"Could not parse amount {value!r}, using 0")
        return 0.0


class ExchangeAdapter:
    """Base class for exchange adapters."""

    def __init__(self):
        self.exchange = None

    def fetch_balances(self) -> List[Balance]:
        """
        Fetch every balance entry of the account, including empty ones.

        Returns:
            List of Balance objects
        """
        raise NotImplementedError

    def fetch_all_prices(self) -> List[Ticker]:
        """
        Fetch the latest price of every market on the exchange.

        Returns:
            List of Ticker objects
        """
        raise NotImplementedError


class BinanceAdapter(ExchangeAdapter):
    """Binance (and Binance.US) spot adapter."""

    def __init__(
        self,
        api_key: str,
        api_secret: str,
        exchange_id: str = "binanceus",
        base_url: Optional[str] = None,
        timeout: float = 10.0,
    ):
        super().__init__()

        exchange_class = getattr(ccxt, exchange_id)
        self.exchange = exchange_class(
            {
                "apiKey": api_key,
                "secret": api_secret,
                "enableRateLimit": True,
                "timeout": int(timeout * 1000),
                "options": {
                    "defaultType": "spot",
                },
            }
        )

        if base_url:
            self._apply_base_url(base_url)

    def _apply_base_url(self, base_url: str) -> None:
        """Point the exchange's REST endpoints at a different host."""
        api_urls = self.exchange.urls["api"]
        if "public" not in api_urls:
            raise ValueError(f"Cannot override base URL for {self.exchange.id}")
        default = urlsplit(api_urls["public"])
        default_root = f"{default.scheme}://{default.netloc}"
        new_root = base_url.rstrip("/")

        for name, url in api_urls.items():
            if isinstance(url, str) and url.startswith(default_root):
                api_urls[name] = new_root + url[len(default_root):]

        logger.info(f"Using API base URL {new_root}")

    def fetch_balances(self) -> List[Balance]:
        """Fetch spot balances from GET /api/v3/account."""
        try:
            account = self.exchange.private_get_account()
        except ccxt.BaseError as e:
            raise FetchError(f"Failed to get account balances: {e}") from e

        balances = [
            Balance(
                asset=entry.get("asset", ""),
                free=entry.get("free", "0"),
                locked=entry.get("locked", "0"),
            )
            for entry in account.get("balances", [])
        ]

        logger.debug(f"Fetched {len(balances)} balance entries")
        return balances

    def fetch_all_prices(self) -> List[Ticker]:
        """Fetch all market prices from GET /api/v3/ticker/price."""
        try:
            prices = self.exchange.public_get_ticker_price()
        except ccxt.BaseError as e:
            raise FetchError(f"Failed to get prices: {e}") from e

        tickers = [
            Ticker(symbol=entry.get("symbol", ""), price=entry.get("price", "0"))
            for entry in prices
        ]

        logger.debug(f"Fetched {len(tickers)} market prices")
        return tickers


def create_exchange(
    exchange_id: str,
    api_key: str,
    api_secret: str,
    base_url: Optional[str] = None,
    timeout: float = 10.0,
) -> ExchangeAdapter:
    """
    Factory function to create exchange adapters.

    Args:
        exchange_id: CCXT exchange id (binanceus, binance)
        api_key: API key
        api_secret: API secret
        base_url: Override for the REST API host
        timeout: Request timeout in seconds

    Returns:
        ExchangeAdapter instance
    """
    exchange_id = exchange_id.lower()

    if exchange_id in ("binance", "binanceus"):
        return BinanceAdapter(api_key, api_secret, exchange_id, base_url, timeout)
    else:
        raise ValueError(f"Unsupported exchange: {exchange_id}")
