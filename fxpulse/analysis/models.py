"""Analysis data models — typed representations of the engine's outputs."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Timeframe:
    """An analysis aggregation interval."""

    code: str  # "15m", "1h", "4h", "1d"
    label: str  # display label, e.g. "1D"
    chart_interval: str  # charting widget interval, e.g. "240"


@dataclass(frozen=True)
class PriceZone:
    """A support or resistance level computed for one timeframe."""

    kind: str  # "support" or "resistance"
    price: float
    strength: str  # "weak", "medium" or "strong"
    note: str
    timeframe: Timeframe


@dataclass(frozen=True)
class EntryZone:
    """A low–high price range in which a setup may be entered."""

    low: float
    high: float

    def __str__(self) -> str:
        return f"{self.low:.4f}-{self.high:.4f}"


@dataclass(frozen=True)
class TradeSetup:
    """A candidate long or short trade derived from the zone set."""

    direction: str  # "long" or "short"
    entry_zone: Optional[EntryZone]
    take_profit: tuple[float, float]  # nearer target first
    risk_reward: str  # e.g. "1:2"
    note: str

    @property
    def entry_display(self) -> str:
        """Entry range as shown to the user, ``"N/A"`` when unavailable."""
        if self.entry_zone is None:
            return "N/A"
        return str(self.entry_zone)

    @property
    def take_profit_display(self) -> str:
        return f"{self.take_profit[0]:.4f}, {self.take_profit[1]:.4f}"


@dataclass(frozen=True)
class SetupPair:
    """The long and short setups produced by one computation."""

    long: TradeSetup
    short: TradeSetup


@dataclass(frozen=True)
class IndicatorValues:
    """Raw values returned by one indicator poll."""

    rsi: float
    macd: float
    ma: float


@dataclass(frozen=True)
class IndicatorReading:
    """A single indicator value with its bullish/bearish label."""

    name: str  # "RSI", "MACD" or "MA"
    value: float
    label: str  # "bullish" or "bearish"


@dataclass(frozen=True)
class MarketBias:
    """Aggregate direction across the indicator readings."""

    bullish_pct: float
    bearish_pct: float
    signal: str  # "BUY", "SELL" or "WAIT"


@dataclass(frozen=True)
class AnalysisSnapshot:
    """Everything the presentation layer renders, published as one unit."""

    timeframe: Timeframe
    indicators: tuple[IndicatorReading, ...]
    zones: tuple[PriceZone, ...]
    setups: SetupPair
    bias: Optional[MarketBias]
    reference_price: float
    updated_at: str

    def to_dict(self) -> dict:
        """Serialise to the JSON shape served by the API."""
        return {
            "timeframe": {
                "code": self.timeframe.code,
                "label": self.timeframe.label,
            },
            "reference_price": self.reference_price,
            "updated_at": self.updated_at,
            "indicators": [
                {"name": r.name, "value": round(r.value, 2), "label": r.label}
                for r in self.indicators
            ],
            "zones": [
                {
                    "kind": z.kind,
                    "price": z.price,
                    "strength": z.strength,
                    "note": z.note,
                }
                for z in self.zones
            ],
            "setups": [
                _setup_to_dict(self.setups.long),
                _setup_to_dict(self.setups.short),
            ],
            "bias": (
                {
                    "bullish_pct": self.bias.bullish_pct,
                    "bearish_pct": self.bias.bearish_pct,
                    "signal": self.bias.signal,
                }
                if self.bias is not None
                else None
            ),
        }


def _setup_to_dict(setup: TradeSetup) -> dict:
    return {
        "direction": setup.direction,
        "entry_zone": setup.entry_display,
        "take_profit": list(setup.take_profit),
        "risk_reward": setup.risk_reward,
        "note": setup.note,
    }


# ── Vocabulary ───────────────────────────────────────────────────────────

SUPPORT = "support"
RESISTANCE = "resistance"

LONG = "long"
SHORT = "short"

BULLISH = "bullish"
BEARISH = "bearish"

ZONE_STRENGTHS = ("weak", "medium", "strong")
