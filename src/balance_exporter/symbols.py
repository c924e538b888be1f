"""
Symbol Registry

Tracks which market trading pairs correspond to assets we hold or were asked
to follow, and maps each trading pair back to the asset label used on the
exported price gauge.

Trading pair symbols are built from a known asset and the configured price
denomination (BTC + USD -> BTCUSD). They are never split apart, since
exchange symbols cannot be reliably decomposed.
"""

import logging
from typing import Dict, Iterable, List, NewType, Optional, Tuple

logger = logging.getLogger(__name__)

Asset = NewType("Asset", str)
TradingPairSymbol = NewType("TradingPairSymbol", str)


def parse_asset_list(text: Optional[str]) -> List[Asset]:
    """
    Parse a comma-separated list of assets (e.g. "BTC, ETH").

    Blank items are dropped, so an empty string yields an empty list.
    """
    if not text:
        return []
    return [Asset(item.strip()) for item in text.split(",") if item.strip()]


class SymbolRegistry:
    """
    In-memory mapping of TradingPairSymbol -> Asset.

    The registry only grows for the lifetime of the process.
    """

    def __init__(self, denomination: str):
        self.denomination = Asset(denomination)
        self._symbols: Dict[TradingPairSymbol, Asset] = {}

    def symbol_for(self, asset: Asset) -> TradingPairSymbol:
        return TradingPairSymbol(f"{asset}{self.denomination}")

    def register_from_manual_list(self, assets: Iterable[Asset]) -> None:
        """
        Seed the registry from an explicit asset list.

        Entries are inserted unconditionally.

        Args:
            assets: Assets to track, in the order given by the user
        """
        for asset in assets:
            symbol = self.symbol_for(asset)
            logger.debug(f"Tracking {symbol}")
            self._symbols[symbol] = asset

    def observe_asset(self, asset: Asset) -> bool:
        """
        Register an asset seen in the account, if not already tracked.

        Holding the denomination currency itself never creates an entry.

        Returns:
            True if a new symbol was added
        """
        if asset == self.denomination:
            return False

        symbol = self.symbol_for(asset)
        if symbol in self._symbols:
            return False

        logger.debug(f"Tracking {symbol}")
        self._symbols[symbol] = asset
        return True

    def lookup(self, symbol: str) -> Optional[Asset]:
        """Return the asset a symbol was registered under, or None."""
        return self._symbols.get(TradingPairSymbol(symbol))

    def symbols(self) -> List[TradingPairSymbol]:
        return list(self._symbols)

    def items(self) -> List[Tuple[TradingPairSymbol, Asset]]:
        return list(self._symbols.items())

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)
