"""
Scheduler: runs the balance and price observers at a fixed interval.

Ticks are scheduled at start + n * interval. A cycle that runs past its tick
is followed immediately by the next one and any further missed ticks are
dropped, so cycles never overlap.
"""

import logging
import threading
import time
from typing import Optional

from .exchanges import FetchError
from .metrics import ExporterMetrics
from .observers import BalanceObserver, PriceObserver

logger = logging.getLogger(__name__)


class Scheduler:
    """Sequential update loop: balances first, then prices."""

    def __init__(
        self,
        balance_observer: BalanceObserver,
        price_observer: PriceObserver,
        interval: float,
        metrics: Optional[ExporterMetrics] = None,
    ):
        """
        Args:
            balance_observer: Runs first in every cycle
            price_observer: Runs second, after the registry is updated
            interval: Seconds between ticks
            metrics: Where failed steps and completed cycles are recorded
        """
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")

        self.balance_observer = balance_observer
        self.price_observer = price_observer
        self.interval = interval
        self.metrics = metrics
        self.cycles = 0
        self._stop_event = threading.Event()

    @property
    def running(self) -> bool:
        return not self._stop_event.is_set()

    def _run_step(self, step: str, observer) -> Optional[int]:
        try:
            return observer.run()
        except FetchError as e:
            logger.error(f"{step.capitalize()} update failed: {e}")
        except Exception as e:
            logger.exception(f"Unexpected error during {step} update: {e}")

        if self.metrics is not None:
            self.metrics.record_error(step)
        return None

    def run_cycle(self) -> None:
        """Run one balance update followed by one price update."""
        logger.debug("Updating...")

        assets = self._run_step("balances", self.balance_observer)
        prices = self._run_step("prices", self.price_observer)

        self.cycles += 1
        if self.metrics is not None:
            self.metrics.mark_updated()

        logger.info(
            f"Cycle {self.cycles} complete: "
            f"{assets if assets is not None else 'no'} balances, "
            f"{prices if prices is not None else 'no'} prices"
        )

    def run_forever(self) -> None:
        """
        Run update cycles until stop() is called.

        The first cycle starts immediately.
        """
        logger.info(f"Scheduler started, interval={self.interval}s")

        next_tick = time.monotonic()
        while not self._stop_event.is_set():
            self.run_cycle()

            next_tick += self.interval
            wait = next_tick - time.monotonic()
            if wait > 0:
                if self._stop_event.wait(wait):
                    break
            else:
                missed = int(-wait // self.interval)
                if missed:
                    logger.warning(f"Update cycle overran interval, skipping {missed} tick(s)")
                next_tick += missed * self.interval

        logger.info("Scheduler stopped")

    def stop(self) -> None:
        """Stop the loop at its next wait."""
        self._stop_event.set()
