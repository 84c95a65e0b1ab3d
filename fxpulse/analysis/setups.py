"""Trade setup generation from a zone set — pure math, no I/O.

The long setup enters around the nearest support, the short setup around the
nearest resistance.  Take-profit targets are fixed distances from the
reference price and the risk-reward label is a per-timeframe lookup; neither
is derived from the entry range.
"""

from typing import Optional

from fxpulse.analysis.models import (
    LONG,
    RESISTANCE,
    SHORT,
    SUPPORT,
    EntryZone,
    PriceZone,
    SetupPair,
    Timeframe,
    TradeSetup,
)
from fxpulse.analysis.policy import BASE_REFERENCE_PRICE, policy_for


def _nearest_zone(
    zones: list[PriceZone],
    kind: str,
    timeframe: Timeframe,
    reference_price: float,
) -> Optional[PriceZone]:
    """Return the zone of *kind* for *timeframe* closest to the reference."""
    candidates = [z for z in zones if z.kind == kind and z.timeframe == timeframe]
    if not candidates:
        return None
    return min(candidates, key=lambda z: abs(z.price - reference_price))


def entry_zone(
    zones: list[PriceZone],
    timeframe: Timeframe,
    kind: str,
    reference_price: float = BASE_REFERENCE_PRICE,
) -> Optional[EntryZone]:
    """Entry range centred on the nearest zone of *kind*.

    Returns ``None`` when no zone of that kind exists for *timeframe*.
    """
    zone = _nearest_zone(zones, kind, timeframe, reference_price)
    if zone is None:
        return None
    spread = policy_for(timeframe).entry_spread
    return EntryZone(
        low=round(zone.price - spread, 4),
        high=round(zone.price + spread, 4),
    )


def take_profit(
    timeframe: Timeframe,
    direction: str,
    reference_price: float = BASE_REFERENCE_PRICE,
) -> tuple[float, float]:
    """Return the (nearer, farther) take-profit prices.

    Raises:
        ValueError: If *direction* is not ``"long"`` or ``"short"``.
    """
    near, far = policy_for(timeframe).take_profit_offsets
    if direction == LONG:
        return round(reference_price + near, 4), round(reference_price + far, 4)
    if direction == SHORT:
        return round(reference_price - near, 4), round(reference_price - far, 4)
    raise ValueError(f"direction must be 'long' or 'short', got '{direction}'")


def generate(
    zones: list[PriceZone],
    timeframe: Timeframe,
    reference_price: float = BASE_REFERENCE_PRICE,
) -> SetupPair:
    """Derive one long and one short setup for *timeframe*.

    Args:
        zones: Output of ``classify`` for the same timeframe.
        timeframe: The timeframe the setups are for.
        reference_price: Price the take-profit offsets are applied to.

    Returns:
        ``SetupPair`` with ``long`` and ``short`` setups.
    """
    risk_reward = policy_for(timeframe).risk_reward
    label = timeframe.label

    long_setup = TradeSetup(
        direction=LONG,
        entry_zone=entry_zone(zones, timeframe, SUPPORT, reference_price),
        take_profit=take_profit(timeframe, LONG, reference_price),
        risk_reward=risk_reward,
        note=f"Wait for confirmation at {label} support",
    )
    short_setup = TradeSetup(
        direction=SHORT,
        entry_zone=entry_zone(zones, timeframe, RESISTANCE, reference_price),
        take_profit=take_profit(timeframe, SHORT, reference_price),
        risk_reward=risk_reward,
        note=f"Watch for reversal at {label} resistance",
    )
    return SetupPair(long=long_setup, short=short_setup)
