"""Indicator labelling and market bias — pure functions, no I/O."""

from fxpulse.analysis.models import (
    BEARISH,
    BULLISH,
    IndicatorReading,
    IndicatorValues,
    MarketBias,
)


# Strict ">" thresholds: a reading exactly on the threshold is bearish.
_BULLISH_ABOVE: dict[str, float] = {
    "RSI": 50.0,
    "MACD": 0.0,
    "MA": 50.0,
}


def label_for(name: str, value: float) -> str:
    """Return ``"bullish"`` or ``"bearish"`` for an indicator value.

    Raises ``KeyError`` for an indicator name without a threshold.
    """
    return BULLISH if value > _BULLISH_ABOVE[name] else BEARISH


def to_readings(values: IndicatorValues) -> tuple[IndicatorReading, ...]:
    """Label one poll's values, in display order RSI, MACD, MA."""
    return tuple(
        IndicatorReading(name=name, value=value, label=label_for(name, value))
        for name, value in (
            ("RSI", values.rsi),
            ("MACD", values.macd),
            ("MA", values.ma),
        )
    )


def market_bias(readings: tuple[IndicatorReading, ...]) -> MarketBias:
    """Summarise readings into a bullish percentage and a signal.

    ``BUY`` needs every reading bullish, ``SELL`` every reading bearish;
    anything mixed is ``WAIT``.

    Raises ``ValueError`` on an empty reading set.
    """
    if not readings:
        raise ValueError("market_bias needs at least one reading")

    bullish = sum(1 for r in readings if r.label == BULLISH)
    bullish_pct = round(100.0 * bullish / len(readings), 1)

    if bullish == len(readings):
        signal = "BUY"
    elif bullish == 0:
        signal = "SELL"
    else:
        signal = "WAIT"

    return MarketBias(
        bullish_pct=bullish_pct,
        bearish_pct=round(100.0 - bullish_pct, 1),
        signal=signal,
    )
