"""Tests for the symbol registry."""

from balance_exporter.symbols import SymbolRegistry, parse_asset_list


class TestSymbolRegistry:
    def setup_method(self):
        self.registry = SymbolRegistry("USD")

    def test_manual_list_seeds_exact_entries(self):
        self.registry.register_from_manual_list(["BTC", "ETH"])

        assert dict(self.registry.items()) == {"BTCUSD": "BTC", "ETHUSD": "ETH"}

    def test_empty_manual_list_is_noop(self):
        self.registry.register_from_manual_list([])

        assert len(self.registry) == 0

    def test_manual_list_includes_denomination(self):
        self.registry.register_from_manual_list(["USD"])

        assert self.registry.lookup("USDUSD") == "USD"

    def test_observe_asset_adds_symbol(self):
        assert self.registry.observe_asset("BTC") is True
        assert self.registry.lookup("BTCUSD") == "BTC"
        assert "BTCUSD" in self.registry

    def test_observe_denomination_never_inserts(self):
        assert self.registry.observe_asset("USD") is False
        assert len(self.registry) == 0
        assert self.registry.lookup("USDUSD") is None

    def test_observe_is_idempotent(self):
        once = SymbolRegistry("USD")
        once.observe_asset("BTC")

        self.registry.observe_asset("BTC")
        assert self.registry.observe_asset("BTC") is False

        assert self.registry.items() == once.items()

    def test_observe_keeps_manual_entry(self):
        self.registry.register_from_manual_list(["BTC"])

        assert self.registry.observe_asset("BTC") is False
        assert len(self.registry) == 1

    def test_growth_is_monotonic(self):
        sizes = []
        for asset in ["BTC", "ETH", "USD", "BTC", "SOL", "ETH"]:
            self.registry.observe_asset(asset)
            sizes.append(len(self.registry))
            assert self.registry.lookup(f"{asset}USD") in (asset, None)

        assert sizes == sorted(sizes)
        for symbol in ["BTCUSD", "ETHUSD", "SOLUSD"]:
            assert self.registry.lookup(symbol) is not None

    def test_lookup_unknown_symbol(self):
        assert self.registry.lookup("DOGEUSD") is None

    def test_custom_denomination(self):
        registry = SymbolRegistry("USDT")
        registry.observe_asset("BTC")
        registry.observe_asset("USDT")

        assert registry.symbols() == ["BTCUSDT"]


class TestParseAssetList:
    def test_splits_and_strips(self):
        assert parse_asset_list("BTC, ETH ,SOL") == ["BTC", "ETH", "SOL"]

    def test_empty_string(self):
        assert parse_asset_list("") == []
        assert parse_asset_list(None) == []

    def test_drops_blank_items(self):
        assert parse_asset_list("BTC,,ETH,") == ["BTC", "ETH"]
