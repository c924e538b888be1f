"""
Exporter wiring.

Builds every component from one ExporterConfig and owns them for the
lifetime of the process: Scheduler -> BalanceObserver -> PriceObserver,
with the metrics server running alongside.
"""

import logging
from typing import Optional

from .config import ExporterConfig
from .exchanges import ExchangeAdapter, create_exchange
from .metrics import ExporterMetrics
from .observers import BalanceObserver, PriceObserver
from .scheduler import Scheduler
from .server import MetricsServer
from .symbols import SymbolRegistry

logger = logging.getLogger(__name__)


class Exporter:
    """
    Balance/price exporter.

    Owns the symbol registry, the gauges, both observers, the scheduler and
    the HTTP server.
    """

    def __init__(self, config: ExporterConfig, adapter: Optional[ExchangeAdapter] = None):
        """
        Args:
            config: Validated configuration
            adapter: Exchange adapter; built from config when omitted
        """
        self.config = config

        if adapter is None:
            adapter = create_exchange(
                exchange_id=config.exchange_id,
                api_key=config.api_key,
                api_secret=config.api_secret,
                base_url=config.api_base_url,
                timeout=config.timeout_seconds,
            )
        self.adapter = adapter

        self.registry = SymbolRegistry(config.price_symbol)
        self.registry.register_from_manual_list(config.manual_assets)
        if len(self.registry):
            logger.info(f"Manually tracking: {', '.join(self.registry.symbols())}")

        self.metrics = ExporterMetrics(namespace=config.namespace)

        self.balance_observer = BalanceObserver(self.adapter, self.metrics, self.registry)
        self.price_observer = PriceObserver(
            self.adapter, self.metrics, self.registry, track_all=config.track_all
        )
        self.scheduler = Scheduler(
            self.balance_observer,
            self.price_observer,
            interval=config.interval_seconds,
            metrics=self.metrics,
        )
        self.server = MetricsServer(self.metrics.registry, port=config.http_port)

    def run(self) -> None:
        """Serve metrics and run update cycles until stop() is called (blocks)."""
        with self.server:
            try:
                self.scheduler.run_forever()
            finally:
                self.scheduler.stop()

    def stop(self) -> None:
        self.scheduler.stop()
