"""Support/Resistance zone classification per timeframe — pure functions."""

from fxpulse.analysis.models import RESISTANCE, SUPPORT, PriceZone, Timeframe
from fxpulse.analysis.policy import (
    BASE_REFERENCE_PRICE,
    ZoneSpec,
    min_reference_price,
    policy_for,
)
from fxpulse.errors import ZoneInvariantError


def _build_zones(
    specs: tuple[ZoneSpec, ...],
    kind: str,
    reference_price: float,
    timeframe: Timeframe,
) -> list[PriceZone]:
    """Turn offset rows into zones, nearest to *reference_price* first."""
    zones = [
        PriceZone(
            kind=kind,
            price=round(reference_price + spec.offset, 4),
            strength=spec.strength,
            note=spec.note or "",
            timeframe=timeframe,
        )
        for spec in specs
    ]
    zones.sort(key=lambda z: abs(z.price - reference_price))
    return zones


def check_zone_set(zones: list[PriceZone], reference_price: float) -> None:
    """Raise ``ZoneInvariantError`` unless *zones* is a usable zone set.

    A usable set has exactly two resistances above *reference_price* and
    two supports below it, every price positive.
    """
    resistances = [z for z in zones if z.kind == RESISTANCE]
    supports = [z for z in zones if z.kind == SUPPORT]
    if len(resistances) != 2 or len(supports) != 2:
        raise ZoneInvariantError(
            f"Expected 2 resistance and 2 support zones, got "
            f"{len(resistances)} and {len(supports)}"
        )
    for z in resistances:
        if z.price <= reference_price:
            raise ZoneInvariantError(
                f"Resistance {z.price:.4f} is not above {reference_price:.4f}"
            )
    for z in supports:
        if z.price >= reference_price:
            raise ZoneInvariantError(
                f"Support {z.price:.4f} is not below {reference_price:.4f}"
            )
    for z in zones:
        if z.price <= 0:
            raise ZoneInvariantError(f"Zone price {z.price:.4f} is not positive")


def classify(
    timeframe: Timeframe,
    reference_price: float = BASE_REFERENCE_PRICE,
) -> list[PriceZone]:
    """Classify the price zones around *reference_price* for *timeframe*.

    Args:
        timeframe: A catalog timeframe.  Anything else raises ``KeyError``.
        reference_price: Current price the zone offsets are applied to.

    Returns:
        Four ``PriceZone`` objects: the two resistances (nearest first)
        followed by the two supports (nearest first).

    Raises:
        ValueError: If *reference_price* would push any support to zero or
            below.
        ZoneInvariantError: If the policy table yields an unusable set.
    """
    floor = min_reference_price()
    if reference_price <= floor:
        raise ValueError(
            f"reference_price must be above {floor:.4f} to keep every zone "
            f"positive, got {reference_price}"
        )

    policy = policy_for(timeframe)

    zones = _build_zones(policy.resistance, RESISTANCE, reference_price, timeframe)
    zones += _build_zones(policy.support, SUPPORT, reference_price, timeframe)

    check_zone_set(zones, reference_price)
    return zones
