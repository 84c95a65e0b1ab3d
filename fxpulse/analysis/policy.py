"""Per-timeframe analysis policy — declarative zone, spread and target tables.

Every number the zone classifier and setup generator use lives here.  Zone
offsets are signed distances from the reference price; take-profit offsets
are long-direction distances (short setups subtract them).
"""

from dataclasses import dataclass

from fxpulse.analysis.models import Timeframe
from fxpulse.analysis.timeframes import D1, H1, H4, M15


# EUR/USD level the hand-authored tables were drawn around.
BASE_REFERENCE_PRICE = 1.0315


@dataclass(frozen=True)
class ZoneSpec:
    """One row of a timeframe's zone table."""

    offset: float
    strength: str
    note: str = ""


@dataclass(frozen=True)
class TimeframePolicy:
    """All tunable numbers for one timeframe."""

    resistance: tuple[ZoneSpec, ZoneSpec]  # nearest first
    support: tuple[ZoneSpec, ZoneSpec]  # nearest first
    entry_spread: float
    take_profit_offsets: tuple[float, float]
    risk_reward: str


POLICIES: dict[Timeframe, TimeframePolicy] = {
    M15: TimeframePolicy(
        resistance=(
            ZoneSpec(0.0010, "medium", "15m local high"),
            ZoneSpec(0.0020, "strong", "15m structure resistance"),
        ),
        support=(
            ZoneSpec(-0.0010, "medium", "15m local low"),
            ZoneSpec(-0.0020, "strong", "15m structure support"),
        ),
        entry_spread=0.0005,
        take_profit_offsets=(0.0015, 0.0030),
        risk_reward="1:1.5",
    ),
    H1: TimeframePolicy(
        resistance=(
            ZoneSpec(0.0015, "medium", "1h structure high"),
            ZoneSpec(0.0025, "strong", "1h supply zone"),
        ),
        support=(
            ZoneSpec(-0.0015, "medium", "1h structure low"),
            ZoneSpec(-0.0025, "strong", "1h demand zone"),
        ),
        entry_spread=0.0008,
        take_profit_offsets=(0.0025, 0.0045),
        risk_reward="1:2",
    ),
    H4: TimeframePolicy(
        resistance=(
            ZoneSpec(0.0030, "medium", "4h structure resistance"),
            ZoneSpec(0.0050, "strong", "4h range high"),
        ),
        support=(
            ZoneSpec(-0.0020, "medium", "4h structure support"),
            ZoneSpec(-0.0030, "strong", "4h range low"),
        ),
        entry_spread=0.0012,
        take_profit_offsets=(0.0040, 0.0070),
        risk_reward="1:2.5",
    ),
    D1: TimeframePolicy(
        resistance=(
            ZoneSpec(0.0055, "medium", "Previous day high"),
            ZoneSpec(0.0075, "strong", "Daily resistance"),
        ),
        support=(
            ZoneSpec(-0.0035, "medium", "Previous day low"),
            ZoneSpec(-0.0045, "strong", "Daily support"),
        ),
        entry_spread=0.0015,
        take_profit_offsets=(0.0060, 0.0100),
        risk_reward="1:3",
    ),
}


def policy_for(timeframe: Timeframe) -> TimeframePolicy:
    """Return the policy row for *timeframe*.

    Raises ``KeyError`` for a timeframe outside the catalog.
    """
    return POLICIES[timeframe]


def risk_reward_for(timeframe: Timeframe) -> str:
    """Fixed risk-reward label for *timeframe* (not derived from prices)."""
    return POLICIES[timeframe].risk_reward


def min_reference_price() -> float:
    """Reference price at which the deepest support of any timeframe hits zero.

    Only prices strictly above this produce positive zone prices everywhere.
    """
    return max(
        -spec.offset for policy in POLICIES.values() for spec in policy.support
    )
