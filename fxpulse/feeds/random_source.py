"""Placeholder indicator feed — bounded random readings."""

import logging
from typing import Optional

import numpy as np

from fxpulse.analysis.models import IndicatorValues

logger = logging.getLogger("fxpulse.feeds.random")


RSI_RANGE = (30.0, 70.0)
MACD_RANGE = (-20.0, 20.0)
MA_RANGE = (40.0, 60.0)


class RandomIndicatorSource:
    """Draws each indicator uniformly from its declared range on every poll.

    Args:
        seed: Seed for a private generator.  Ignored if *rng* is given.
        rng: Generator to draw from (tests pass a seeded one).
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self._rng = rng if rng is not None else np.random.default_rng(seed)

    async def poll(self) -> IndicatorValues:
        values = IndicatorValues(
            rsi=float(self._rng.uniform(*RSI_RANGE)),
            macd=float(self._rng.uniform(*MACD_RANGE)),
            ma=float(self._rng.uniform(*MA_RANGE)),
        )
        logger.debug(
            "Polled RSI=%.2f MACD=%.2f MA=%.2f", values.rsi, values.macd, values.ma,
        )
        return values
