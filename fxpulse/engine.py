"""FxPulse — market analysis engine (orchestration).

Connects the zone classifier, setup generator and indicator source into one
snapshot.  ``select`` and ``refresh`` are serialised on a lock; the periodic
refresh cadence belongs to the caller (see ``fxpulse.scheduler``).
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional

from fxpulse.analysis.indicators import market_bias, to_readings
from fxpulse.analysis.models import AnalysisSnapshot, IndicatorReading, Timeframe
from fxpulse.analysis.policy import BASE_REFERENCE_PRICE
from fxpulse.analysis.setups import generate
from fxpulse.analysis.timeframes import DEFAULT_TIMEFRAME, all_timeframes, get_timeframe
from fxpulse.analysis.zones import classify
from fxpulse.errors import EngineNotReadyError, IndicatorPollError
from fxpulse.feeds.base import IndicatorSource

logger = logging.getLogger("fxpulse.engine")


class MarketAnalysisEngine:
    """Holds the active timeframe and publishes analysis snapshots.

    Args:
        source: Indicator feed implementing ``IndicatorSource``.
        reference_price: Price the zone and target tables are applied to.
        poll_timeout: Seconds to wait for one indicator poll.
        default_timeframe: Timeframe code active after ``initialize()``.

    Raises:
        ValueError: If *reference_price* would put a zone at or below zero.
        ZoneInvariantError: If a zone rounds to a non-positive price.
    """

    def __init__(
        self,
        source: IndicatorSource,
        reference_price: float = BASE_REFERENCE_PRICE,
        poll_timeout: float = 10.0,
        default_timeframe: str = DEFAULT_TIMEFRAME.code,
    ) -> None:
        # Every timeframe must be classifiable before any select can reach it.
        for tf in all_timeframes():
            classify(tf, reference_price)
        self._source = source
        self._reference_price = reference_price
        self._poll_timeout = poll_timeout
        self._timeframe: Timeframe = get_timeframe(default_timeframe)
        self._lock = asyncio.Lock()
        self._poll_task: Optional[asyncio.Future] = None
        self._snapshot: Optional[AnalysisSnapshot] = None
        self._refresh_count: int = 0

    @classmethod
    async def create(cls, source: IndicatorSource, **kwargs) -> "MarketAnalysisEngine":
        """Construct an engine and run its first full computation."""
        engine = cls(source, **kwargs)
        await engine.initialize()
        return engine

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def timeframe(self) -> Timeframe:
        """The active timeframe."""
        return self._timeframe

    @property
    def reference_price(self) -> float:
        return self._reference_price

    @property
    def ready(self) -> bool:
        """True once the first snapshot has been published."""
        return self._snapshot is not None

    @property
    def refresh_count(self) -> int:
        return self._refresh_count

    # ── Public API ───────────────────────────────────────────────────────

    async def initialize(self) -> None:
        """Run the first full computation (zones, setups and indicators)."""
        await self.refresh()
        logger.info(
            "Engine initialised on %s around %.4f.",
            self._timeframe.code, self._reference_price,
        )

    def current_snapshot(self) -> AnalysisSnapshot:
        """Return the last published snapshot.

        Raises ``EngineNotReadyError`` before ``initialize()`` has completed.
        """
        if self._snapshot is None:
            raise EngineNotReadyError("Engine has not completed its first computation")
        return self._snapshot

    async def select(self, code: str) -> AnalysisSnapshot:
        """Switch to the timeframe *code* and recompute zones and setups.

        Indicator readings are carried over unchanged.  An in-flight poll is
        cancelled so its result is never applied after the switch.

        Raises:
            InvalidTimeframeError: For an unknown code; state is untouched.
        """
        timeframe = get_timeframe(code)

        if self._poll_task is not None and not self._poll_task.done():
            logger.info("Cancelling in-flight indicator poll for timeframe change.")
            self._poll_task.cancel()

        async with self._lock:
            previous = self._timeframe
            indicators = self._snapshot.indicators if self._snapshot else ()
            self._publish(timeframe, indicators)
            self._timeframe = timeframe
            logger.info("Timeframe %s → %s.", previous.code, timeframe.code)
            return self._snapshot

    async def refresh(self) -> AnalysisSnapshot:
        """Re-poll indicators and recompute zones/setups for the active timeframe.

        A failed, timed-out or cancelled poll keeps the previous readings.
        """
        async with self._lock:
            indicators = await self._poll_indicators()
            self._refresh_count += 1
            self._publish(self._timeframe, indicators)
            return self._snapshot

    # ── Internals ────────────────────────────────────────────────────────

    async def _poll_indicators(self) -> tuple[IndicatorReading, ...]:
        """Poll the source once, falling back to the last known readings."""
        previous = self._snapshot.indicators if self._snapshot else ()

        task = asyncio.ensure_future(self._source.poll())
        self._poll_task = task
        try:
            done, _ = await asyncio.wait({task}, timeout=self._poll_timeout)
        except asyncio.CancelledError:
            task.cancel()
            raise
        finally:
            self._poll_task = None

        if not done:
            task.cancel()
            logger.warning(
                "Indicator poll timed out after %.1fs — keeping last readings.",
                self._poll_timeout,
            )
            return previous

        if task.cancelled():
            logger.info("Indicator poll superseded — keeping last readings.")
            return previous

        exc = task.exception()
        if isinstance(exc, IndicatorPollError):
            logger.warning("Indicator poll failed: %s — keeping last readings.", exc)
            return previous
        if exc is not None:
            raise exc

        return to_readings(task.result())

    def _publish(
        self,
        timeframe: Timeframe,
        indicators: tuple[IndicatorReading, ...],
    ) -> None:
        """Compute zones and setups for *timeframe* and swap in a new snapshot."""
        zones = classify(timeframe, self._reference_price)
        setups = generate(zones, timeframe, self._reference_price)

        self._snapshot = AnalysisSnapshot(
            timeframe=timeframe,
            indicators=indicators,
            zones=tuple(zones),
            setups=setups,
            bias=market_bias(indicators) if indicators else None,
            reference_price=self._reference_price,
            updated_at=datetime.now(timezone.utc).isoformat(),
        )
        logger.debug(
            "Published %s snapshot: %d zones, %d readings.",
            timeframe.code, len(zones), len(indicators),
        )
