"""
Prometheus gauges exported by the balance exporter.

All metrics live on a private CollectorRegistry so the /metrics endpoint
only exposes what this process publishes.
"""

import time
from typing import Optional

from prometheus_client import CollectorRegistry, Counter, Gauge

DEFAULT_NAMESPACE = "binance"


class ExporterMetrics:
    """Gauge storage for balances and prices."""

    def __init__(
        self,
        namespace: str = DEFAULT_NAMESPACE,
        registry: Optional[CollectorRegistry] = None,
    ):
        self.registry = registry if registry is not None else CollectorRegistry()

        self.balance = Gauge(
            "balance",
            "Balance in account for assets",
            ["symbol", "status"],
            namespace=namespace,
            registry=self.registry,
        )
        self.price = Gauge(
            "price",
            "Symbol prices",
            ["symbol"],
            namespace=namespace,
            registry=self.registry,
        )
        self.scrape_errors = Counter(
            "scrape_errors",
            "Failed exchange fetches by update step",
            ["step"],
            namespace=namespace,
            registry=self.registry,
        )
        self.last_update = Gauge(
            "last_update_timestamp_seconds",
            "Unix time of the last completed update cycle",
            namespace=namespace,
            registry=self.registry,
        )

    def set_balance(self, asset: str, status: str, amount: float) -> None:
        self.balance.labels(asset, status).set(amount)

    def set_price(self, symbol: str, price: float) -> None:
        self.price.labels(symbol).set(price)

    def record_error(self, step: str) -> None:
        self.scrape_errors.labels(step).inc()

    def mark_updated(self, timestamp: Optional[float] = None) -> None:
        self.last_update.set(timestamp if timestamp is not None else time.time())
