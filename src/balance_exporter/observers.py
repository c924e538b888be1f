"""
Balance and price observers.

Each observer performs one exchange fetch and writes the resulting gauges.
The balance observer also feeds newly held assets into the symbol registry,
which the price observer then uses to decide which prices to publish.
"""

import logging

from .exchanges import ExchangeAdapter, parse_amount
from .metrics import ExporterMetrics
from .symbols import Asset, SymbolRegistry

logger = logging.getLogger(__name__)


class BalanceObserver:
    """Publishes free/locked balances and registers held assets."""

    def __init__(
        self,
        adapter: ExchangeAdapter,
        metrics: ExporterMetrics,
        registry: SymbolRegistry,
    ):
        self.adapter = adapter
        self.metrics = metrics
        self.registry = registry

    def run(self) -> int:
        """
        Update balance gauges from the account.

        Entries whose free + locked amount is zero are skipped entirely.

        Returns:
            Number of assets observed

        Raises:
            FetchError: If the balance request fails
        """
        balances = self.adapter.fetch_balances()

        observed = 0
        for balance in balances:
            free = parse_amount(balance.free)
            locked = parse_amount(balance.locked)

            if free + locked == 0:
                continue

            logger.debug(f"Observing free in wallet {free} for {balance.asset}")
            self.metrics.set_balance(balance.asset, "free", free)
            logger.debug(f"Observing locked in wallet {locked} for {balance.asset}")
            self.metrics.set_balance(balance.asset, "locked", locked)

            self.registry.observe_asset(Asset(balance.asset))
            observed += 1

        return observed


class PriceObserver:
    """Publishes prices for tracked symbols, or for every market."""

    def __init__(
        self,
        adapter: ExchangeAdapter,
        metrics: ExporterMetrics,
        registry: SymbolRegistry,
        track_all: bool = False,
    ):
        self.adapter = adapter
        self.metrics = metrics
        self.registry = registry
        self.track_all = track_all

    def run(self) -> int:
        """
        Update price gauges from the exchange's market prices.

        In track-all mode every price is labelled with its full market
        symbol. Otherwise only registered symbols are kept, labelled with
        the asset so they line up with the balance gauges.

        Returns:
            Number of price gauges written

        Raises:
            FetchError: If the price request fails
        """
        tickers = self.adapter.fetch_all_prices()

        written = 0
        for ticker in tickers:
            if self.track_all:
                label = ticker.symbol
            else:
                label = self.registry.lookup(ticker.symbol)
                if label is None:
                    continue

            price = parse_amount(ticker.price)
            logger.debug(f"Observing {price} for {label}")
            self.metrics.set_price(label, price)
            written += 1

        return written
