"""Shared fixtures for balance exporter tests."""

import logging
from typing import List, Optional

import pytest

from balance_exporter.exchanges import Balance, ExchangeAdapter, Ticker
from balance_exporter.metrics import ExporterMetrics
from balance_exporter.symbols import SymbolRegistry


class FakeAdapter(ExchangeAdapter):
    """In-memory exchange returning canned balances and prices."""

    def __init__(
        self,
        balances: Optional[List[Balance]] = None,
        prices: Optional[List[Ticker]] = None,
    ):
        super().__init__()
        self.balances = balances or []
        self.prices = prices or []
        self.balance_error: Optional[Exception] = None
        self.price_error: Optional[Exception] = None
        self.balance_calls = 0
        self.price_calls = 0

    def fetch_balances(self) -> List[Balance]:
        self.balance_calls += 1
        if self.balance_error is not None:
            raise self.balance_error
        return list(self.balances)

    def fetch_all_prices(self) -> List[Ticker]:
        self.price_calls += 1
        if self.price_error is not None:
            raise self.price_error
        return list(self.prices)


@pytest.fixture
def adapter():
    return FakeAdapter(
        balances=[
            Balance("BTC", "0.5", "0.1"),
            Balance("ETH", "0", "0"),
            Balance("USD", "1200.00", "0"),
        ],
        prices=[
            Ticker("BTCUSD", "50000"),
            Ticker("ETHUSD", "3000"),
            Ticker("ETHBTC", "0.06"),
        ],
    )


@pytest.fixture
def metrics():
    return ExporterMetrics()


@pytest.fixture
def registry():
    return SymbolRegistry("USD")


def balance_value(metrics: ExporterMetrics, asset: str, status: str):
    return metrics.registry.get_sample_value(
        "binance_balance", {"symbol": asset, "status": status}
    )


def price_value(metrics: ExporterMetrics, symbol: str):
    return metrics.registry.get_sample_value("binance_price", {"symbol": symbol})


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo console handlers and levels installed by setup_logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
