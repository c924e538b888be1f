"""
HTTP server exposing the Prometheus /metrics endpoint.

The listener is started with prometheus_client's start_http_server and is
owned by MetricsServer, which shuts it down explicitly through stop() (or by
leaving the context manager).
"""

import logging

from prometheus_client import CollectorRegistry, start_http_server

logger = logging.getLogger(__name__)


class MetricsServer:
    """Owned, stoppable HTTP listener for a metrics registry."""

    def __init__(self, registry: CollectorRegistry, port: int, host: str = "0.0.0.0"):
        self.registry = registry
        self.host = host
        self._port = port
        self._httpd = None
        self._thread = None

    @property
    def port(self) -> int:
        """Bound port (resolved after start when 0 was requested)."""
        if self._httpd is not None:
            return self._httpd.server_address[1]
        return self._port

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._httpd is not None:
            raise RuntimeError("Metrics server already started")

        self._httpd, self._thread = start_http_server(
            self._port, addr=self.host, registry=self.registry
        )
        logger.info(f"Starting HTTP server at {self.host}:{self.port}")

    def stop(self) -> None:
        if self._httpd is None:
            return

        logger.info("Stopping HTTP server")
        self._httpd.shutdown()
        self._httpd.server_close()
        self._thread.join()
        self._httpd = None
        self._thread = None

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
