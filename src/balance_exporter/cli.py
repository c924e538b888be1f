"""
Balance Exporter

Polls an exchange account's balances and market prices and serves them as
Prometheus gauges on /metrics.

Usage:
    balance-exporter --update-interval 30s --http-port 8090
    balance-exporter --symbols BTC,ETH --price-symbol USD
    balance-exporter --track-all --debug

Requirements:
    - Exchange API keys in .env file (BINANCE_API_KEY, BINANCE_API_SECRET)
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from .app import Exporter
from .config import ConfigError, load_config

CONSOLE_HANDLER_NAME = "balance_exporter.console"


def setup_logging(debug: bool = False) -> logging.Logger:
    """Setup console logging, replacing any handler installed by an earlier call."""
    level = logging.DEBUG if debug else logging.INFO

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.set_name(CONSOLE_HANDLER_NAME)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    logger = logging.getLogger()
    logger.setLevel(level)
    for handler in list(logger.handlers):
        if handler.get_name() == CONSOLE_HANDLER_NAME:
            logger.removeHandler(handler)
            handler.close()
    logger.addHandler(console_handler)

    # ccxt logs every request at DEBUG
    logging.getLogger("ccxt").setLevel(logging.INFO)

    return logger


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    load_dotenv(dotenv_path=Path.cwd() / ".env")

    try:
        config = load_config(argv)
    except ConfigError as e:
        setup_logging()
        logging.error(str(e))
        sys.exit(1)

    logger = setup_logging(config.debug)

    logger.info("=" * 70)
    logger.info("Balance Exporter - Starting")
    logger.info("=" * 70)
    logger.info(f"Exchange: {config.exchange_id} ({config.api_base_url})")
    logger.info(f"Update interval: {config.update_interval}")
    logger.info(f"Price symbol: {config.price_symbol}")
    if config.track_all:
        logger.info("Tracking all market symbols")

    if not config.api_key or not config.api_secret:
        logger.warning("No API key/secret configured, balance updates will fail")

    exporter = Exporter(config)
    try:
        exporter.run()
    except KeyboardInterrupt:
        logger.info("Shutdown signal received")
        exporter.stop()
    except OSError as e:
        logger.error(f"HTTP server errored out: {e}")
        sys.exit(1)

    logger.info("Goodbye!")
