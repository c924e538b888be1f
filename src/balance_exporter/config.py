"""
Configuration for the balance exporter.

Values come from command-line flags, falling back to environment variables
(a .env file is loaded by the CLI before parsing), then to built-in defaults.
Configuration is built once at startup and never changes afterwards.
"""

import argparse
import os
import re
from dataclasses import dataclass
from typing import List, Optional

from .metrics import DEFAULT_NAMESPACE
from .symbols import Asset, parse_asset_list

DEFAULT_UPDATE_INTERVAL = "30s"
DEFAULT_BASE_URL = "https://api.binance.us"
DEFAULT_EXCHANGE = "binanceus"
DEFAULT_HTTP_PORT = 8090
DEFAULT_PRICE_SYMBOL = "USD"
DEFAULT_REQUEST_TIMEOUT = "10s"


class ConfigError(ValueError):
    """Raised for configuration that must stop the exporter from starting."""


_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+\.?\d*|\.\d+)(ns|us|µs|ms|s|m|h)")


def parse_duration(text: str) -> float:
    """
    Parse a Go-style duration string into seconds.

    Accepts a sequence of decimal numbers with units, e.g. "30s", "1m30s",
    "1.5h", "250ms". A bare "0" is allowed.

    Raises:
        ConfigError: If the string is not a valid duration
    """
    value = (text or "").strip()
    if not value:
        raise ConfigError("invalid duration: empty string")

    sign = 1.0
    body = value
    if body[0] in "+-":
        sign = -1.0 if body[0] == "-" else 1.0
        body = body[1:]

    if body == "0":
        return 0.0

    total = 0.0
    pos = 0
    while pos < len(body):
        match = _DURATION_PART.match(body, pos)
        if match is None:
            raise ConfigError(f"invalid duration: {text!r}")
        number, unit = match.groups()
        total += float(number) * _DURATION_UNITS[unit]
        pos = match.end()

    if pos == 0:
        raise ConfigError(f"invalid duration: {text!r}")

    return sign * total


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


@dataclass(frozen=True)
class ExporterConfig:
    """Runtime configuration, immutable once built."""

    api_key: str = ""
    api_secret: str = ""
    api_base_url: str = DEFAULT_BASE_URL
    exchange_id: str = DEFAULT_EXCHANGE
    update_interval: str = DEFAULT_UPDATE_INTERVAL
    http_port: int = DEFAULT_HTTP_PORT
    track_all: bool = False
    symbols: str = ""
    price_symbol: str = DEFAULT_PRICE_SYMBOL
    request_timeout: str = DEFAULT_REQUEST_TIMEOUT
    debug: bool = False
    namespace: str = DEFAULT_NAMESPACE

    @property
    def interval_seconds(self) -> float:
        return parse_duration(self.update_interval)

    @property
    def timeout_seconds(self) -> float:
        return parse_duration(self.request_timeout)

    @property
    def manual_assets(self) -> List[Asset]:
        return parse_asset_list(self.symbols)

    def validate(self) -> None:
        """
        Check values that make the exporter unable to run.

        Raises:
            ConfigError: On the first invalid value
        """
        try:
            interval = self.interval_seconds
        except ConfigError as e:
            raise ConfigError(f"Could not parse update interval duration, {e}")
        if interval <= 0:
            raise ConfigError(f"Update interval must be positive, got {self.update_interval!r}")

        try:
            timeout = self.timeout_seconds
        except ConfigError as e:
            raise ConfigError(f"Could not parse request timeout duration, {e}")
        if timeout <= 0:
            raise ConfigError(f"Request timeout must be positive, got {self.request_timeout!r}")

        if not 0 <= self.http_port <= 65535:
            raise ConfigError(f"HTTP server port out of range: {self.http_port}")

        if not self.price_symbol:
            raise ConfigError("Price symbol must not be empty")


def build_parser() -> argparse.ArgumentParser:
    """Argument parser whose defaults come from the environment."""
    parser = argparse.ArgumentParser(
        description="Export exchange balances and prices as Prometheus metrics"
    )
    parser.add_argument(
        "--api-key",
        default=os.getenv("BINANCE_API_KEY", ""),
        help="Exchange API key (env: BINANCE_API_KEY)",
    )
    parser.add_argument(
        "--api-secret",
        default=os.getenv("BINANCE_API_SECRET", ""),
        help="Exchange API secret (env: BINANCE_API_SECRET)",
    )
    parser.add_argument(
        "--api-base-url",
        default=os.getenv("BINANCE_API_BASE_URL", DEFAULT_BASE_URL),
        help=f"Exchange base API URL (default: {DEFAULT_BASE_URL})",
    )
    parser.add_argument(
        "--exchange",
        dest="exchange_id",
        default=os.getenv("EXPORTER_EXCHANGE", DEFAULT_EXCHANGE),
        choices=["binance", "binanceus"],
        help=f"CCXT exchange id (default: {DEFAULT_EXCHANGE})",
    )
    parser.add_argument(
        "--update-interval",
        default=os.getenv("EXPORTER_UPDATE_INTERVAL", DEFAULT_UPDATE_INTERVAL),
        help=f"Update interval as a duration, e.g. 30s or 1m (default: {DEFAULT_UPDATE_INTERVAL})",
    )
    parser.add_argument(
        "--http-port",
        type=int,
        default=_env_int("EXPORTER_HTTP_PORT", DEFAULT_HTTP_PORT),
        help=f"HTTP server port (default: {DEFAULT_HTTP_PORT})",
    )
    parser.add_argument(
        "--track-all",
        action="store_true",
        default=_env_bool("EXPORTER_TRACK_ALL"),
        help="Export prices for every market symbol",
    )
    parser.add_argument(
        "--symbols",
        default=os.getenv("EXPORTER_SYMBOLS", ""),
        help="Comma-separated assets to always track, e.g. BTC,ETH",
    )
    parser.add_argument(
        "--price-symbol",
        default=os.getenv("EXPORTER_PRICE_SYMBOL", DEFAULT_PRICE_SYMBOL),
        help=f"Quote currency used to build market symbols (default: {DEFAULT_PRICE_SYMBOL})",
    )
    parser.add_argument(
        "--request-timeout",
        default=os.getenv("EXPORTER_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
        help=f"Exchange request timeout (default: {DEFAULT_REQUEST_TIMEOUT})",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=_env_bool("EXPORTER_DEBUG"),
        help="Set debug log level",
    )
    return parser


def load_config(argv: Optional[List[str]] = None) -> ExporterConfig:
    """
    Build and validate the configuration from flags and environment.

    Raises:
        ConfigError: If the configuration is invalid
    """
    args = build_parser().parse_args(argv)

    config = ExporterConfig(
        api_key=args.api_key,
        api_secret=args.api_secret,
        api_base_url=args.api_base_url,
        exchange_id=args.exchange_id,
        update_interval=args.update_interval,
        http_port=args.http_port,
        track_all=args.track_all,
        symbols=args.symbols,
        price_symbol=args.price_symbol.strip(),
        request_timeout=args.request_timeout,
        debug=args.debug,
    )
    config.validate()
    return config
