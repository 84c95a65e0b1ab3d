"""Refresh scheduler — drives ``MarketAnalysisEngine.refresh()`` on an interval.

The engine owns no timer; this loop is the host-side tick source.
"""

import asyncio
import logging

from fxpulse.engine import MarketAnalysisEngine

logger = logging.getLogger("fxpulse.scheduler")


class RefreshScheduler:
    """Calls ``engine.refresh()`` every *interval* seconds until stopped.

    Args:
        engine: The engine to refresh.
        interval: Seconds between ticks (reference cadence is 5).
    """

    def __init__(self, engine: MarketAnalysisEngine, interval: float = 5.0) -> None:
        if interval < 0:
            raise ValueError(f"interval must be >= 0, got {interval}")
        self._engine = engine
        self._interval = interval
        self._stop_event = asyncio.Event()
        self._running: bool = False
        self._tick_count: int = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def tick_count(self) -> int:
        return self._tick_count

    def stop(self) -> None:
        """Signal the loop to exit after the current tick.

        A stopped scheduler stays stopped; build a new one to restart.
        """
        self._stop_event.set()

    async def run(self, max_ticks: int = 0) -> int:
        """Run the refresh loop until stopped.

        Args:
            max_ticks: Stop after this many ticks (0 = unlimited).

        Returns:
            Number of ticks executed in this run.
        """
        self._running = True
        ticks = 0
        logger.info("Refresh scheduler started (every %.1fs).", self._interval)

        try:
            while not self._stop_event.is_set():
                ticks += 1
                self._tick_count += 1
                try:
                    snapshot = await self._engine.refresh()
                    logger.debug("Tick %d: refreshed %s.", ticks, snapshot.timeframe.code)
                except Exception as exc:
                    logger.error("Tick %d refresh error: %s", ticks, exc)

                if max_ticks > 0 and ticks >= max_ticks:
                    break

                # Interruptible sleep: stop() wakes the loop immediately.
                try:
                    await asyncio.wait_for(self._stop_event.wait(), timeout=self._interval)
                except asyncio.TimeoutError:
                    pass
        finally:
            self._running = False
            logger.info("Refresh scheduler stopped after %d tick(s).", ticks)

        return ticks
