"""End-to-end tests for the exporter wiring."""

import logging
import threading
import time
import urllib.request

import pytest

from balance_exporter.app import Exporter
from balance_exporter.cli import CONSOLE_HANDLER_NAME, main, setup_logging
from balance_exporter.config import ExporterConfig

from conftest import price_value


class TestExporter:
    def test_manual_symbols_are_seeded(self, adapter):
        exporter = Exporter(ExporterConfig(symbols="ETH, SOL"), adapter=adapter)

        assert dict(exporter.registry.items()) == {"ETHUSD": "ETH", "SOLUSD": "SOL"}

    def test_one_cycle_publishes_held_asset_price(self, adapter):
        exporter = Exporter(ExporterConfig(), adapter=adapter)

        exporter.scheduler.run_cycle()

        assert price_value(exporter.metrics, "BTC") == pytest.approx(50000.0)
        assert price_value(exporter.metrics, "ETH") is None

    def test_track_all_mode(self, adapter):
        exporter = Exporter(ExporterConfig(track_all=True), adapter=adapter)

        exporter.scheduler.run_cycle()

        assert price_value(exporter.metrics, "ETHBTC") == pytest.approx(0.06)
        assert price_value(exporter.metrics, "BTCUSD") == pytest.approx(50000.0)

    def test_run_serves_metrics_until_stopped(self, adapter):
        exporter = Exporter(ExporterConfig(http_port=0, update_interval="1s"), adapter=adapter)
        thread = threading.Thread(target=exporter.run)
        thread.start()

        deadline = time.monotonic() + 5
        while exporter.scheduler.cycles < 1 and time.monotonic() < deadline:
            time.sleep(0.01)
        body = urllib.request.urlopen(
            f"http://127.0.0.1:{exporter.server.port}/metrics", timeout=5
        ).read().decode()

        exporter.stop()
        thread.join(timeout=5)

        assert not thread.is_alive()
        assert not exporter.server.running
        assert 'binance_price{symbol="BTC"} 50000.0' in body


class TestMain:
    def test_bad_interval_exits_before_starting(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("EXPORTER_UPDATE_INTERVAL", raising=False)
        monkeypatch.delenv("EXPORTER_HTTP_PORT", raising=False)

        with pytest.raises(SystemExit) as excinfo:
            main(["--update-interval", "whenever"])

        assert excinfo.value.code == 1


class TestSetupLogging:
    def console_handlers(self):
        return [h for h in logging.getLogger().handlers if h.get_name() == CONSOLE_HANDLER_NAME]

    def test_repeated_setup_keeps_one_console_handler(self):
        setup_logging()
        setup_logging(debug=True)

        handlers = self.console_handlers()
        assert len(handlers) == 1
        assert handlers[0].level == logging.DEBUG
        assert logging.getLogger().level == logging.DEBUG

    def test_failed_startup_then_setup_keeps_one_handler(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)

        with pytest.raises(SystemExit):
            main(["--update-interval", "whenever"])
        setup_logging()

        assert len(self.console_handlers()) == 1
