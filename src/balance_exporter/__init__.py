"""
Balance Exporter - Exchange Balance & Price Metrics

This package polls an exchange account's balances and market prices and
republishes them as Prometheus gauges for monitoring and alerting.
"""

__version__ = "0.1.0"

from .symbols import (
    Asset,
    TradingPairSymbol,
    SymbolRegistry,
    parse_asset_list,
)

from .exchanges import (
    create_exchange,
    ExchangeAdapter,
    BinanceAdapter,
    Balance,
    Ticker,
    FetchError,
)

from .observers import BalanceObserver, PriceObserver
from .scheduler import Scheduler
from .config import ExporterConfig, ConfigError, load_config, parse_duration

__all__ = [
    "Asset",
    "TradingPairSymbol",
    "SymbolRegistry",
    "parse_asset_list",
    "create_exchange",
    "ExchangeAdapter",
    "BinanceAdapter",
    "Balance",
    "Ticker",
    "FetchError",
    "BalanceObserver",
    "PriceObserver",
    "Scheduler",
    "ExporterConfig",
    "ConfigError",
    "load_config",
    "parse_duration",
]
