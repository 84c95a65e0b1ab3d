"""Indicator source protocol.

Defines the interface every indicator feed must implement.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from fxpulse.analysis.models import IndicatorValues


@runtime_checkable
class IndicatorSource(Protocol):
    """Interface that all indicator feeds must satisfy."""

    async def poll(self) -> IndicatorValues:
        """Return the current RSI, MACD and MA values.

        Raises ``IndicatorPollError`` when no reading can be produced.
        """
        ...
