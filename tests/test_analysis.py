"""Deterministic tests for the analysis modules.

Timeframe catalog, zone classification, setup generation and indicator
labelling.  Same input = same output, always.
"""

import pytest

from fxpulse.analysis.indicators import label_for, market_bias, to_readings
from fxpulse.analysis.models import (
    IndicatorReading,
    IndicatorValues,
    PriceZone,
    TradeSetup,
)
from fxpulse.analysis.policy import (
    BASE_REFERENCE_PRICE,
    POLICIES,
    min_reference_price,
    risk_reward_for,
)
from fxpulse.analysis.setups import entry_zone, generate, take_profit
from fxpulse.analysis.timeframes import (
    D1,
    H1,
    H4,
    M15,
    all_timeframes,
    display_label,
    get_timeframe,
)
from fxpulse.analysis.zones import check_zone_set, classify
from fxpulse.errors import InvalidTimeframeError, ZoneInvariantError


ALL_TIMEFRAMES = [M15, H1, H4, D1]


# ── Timeframe catalog ────────────────────────────────────────────────────


class TestTimeframeCatalog:
    def test_all_timeframes_ordered(self):
        assert [tf.code for tf in all_timeframes()] == ["15m", "1h", "4h", "1d"]

    def test_display_labels(self):
        assert [display_label(tf) for tf in all_timeframes()] == ["15m", "1h", "4h", "1D"]

    def test_get_timeframe_by_code(self):
        assert get_timeframe("4h") is H4

    def test_get_timeframe_is_case_insensitive(self):
        assert get_timeframe("1D") is D1
        assert get_timeframe(" 15M ") is M15

    def test_get_timeframe_unknown_raises(self):
        with pytest.raises(InvalidTimeframeError, match="Unknown timeframe '2w'"):
            get_timeframe("2w")

    def test_invalid_timeframe_is_value_error(self):
        with pytest.raises(ValueError):
            get_timeframe("")

    def test_timeframe_frozen(self):
        with pytest.raises(AttributeError):
            M15.code = "5m"

    def test_every_timeframe_has_a_policy(self):
        assert set(POLICIES) == set(all_timeframes())


# ── Zone classifier ──────────────────────────────────────────────────────


class TestZoneClassifier:
    @pytest.mark.parametrize("tf", ALL_TIMEFRAMES, ids=lambda tf: tf.code)
    def test_two_of_each_kind_on_the_right_side(self, tf):
        zones = classify(tf, BASE_REFERENCE_PRICE)
        resistances = [z for z in zones if z.kind == "resistance"]
        supports = [z for z in zones if z.kind == "support"]

        assert len(zones) == 4
        assert len(resistances) == 2
        assert len(supports) == 2
        assert all(z.price > BASE_REFERENCE_PRICE for z in resistances)
        assert all(z.price < BASE_REFERENCE_PRICE for z in supports)

    @pytest.mark.parametrize("tf", ALL_TIMEFRAMES, ids=lambda tf: tf.code)
    def test_near_zone_precedes_far_zone(self, tf):
        zones = classify(tf, BASE_REFERENCE_PRICE)
        for kind in ("resistance", "support"):
            near, far = [z for z in zones if z.kind == kind]
            assert abs(near.price - BASE_REFERENCE_PRICE) < abs(far.price - BASE_REFERENCE_PRICE)

    def test_resistances_listed_before_supports(self):
        kinds = [z.kind for z in classify(H1)]
        assert kinds == ["resistance", "resistance", "support", "support"]

    def test_15m_literal_zones(self):
        zones = classify(M15, 1.0315)
        assert [(z.kind, z.price, z.strength) for z in zones] == [
            ("resistance", pytest.approx(1.0325), "medium"),
            ("resistance", pytest.approx(1.0335), "strong"),
            ("support", pytest.approx(1.0305), "medium"),
            ("support", pytest.approx(1.0295), "strong"),
        ]

    def test_1d_literal_zones(self):
        zones = classify(D1, 1.0315)
        by_price = {round(z.price, 4): (z.kind, z.strength) for z in zones}
        assert by_price == {
            1.0390: ("resistance", "strong"),
            1.0370: ("resistance", "medium"),
            1.0270: ("support", "strong"),
            1.0280: ("support", "medium"),
        }

    def test_zone_notes_and_timeframe(self):
        zones = classify(H4)
        assert all(isinstance(z.note, str) for z in zones)
        assert all(z.timeframe is H4 for z in zones)
        assert zones[1].note == "4h range high"

    def test_longer_timeframes_sit_wider(self):
        widest = [
            max(abs(z.price - BASE_REFERENCE_PRICE) for z in classify(tf))
            for tf in ALL_TIMEFRAMES
        ]
        assert widest == sorted(widest)
        assert widest[0] <= 0.0021
        assert widest[-1] <= 0.0121

    def test_zones_follow_reference_price(self):
        zones = classify(M15, 1.1000)
        assert zones[0].price == pytest.approx(1.1010)
        assert zones[2].price == pytest.approx(1.0990)

    def test_non_positive_reference_price_raises(self):
        with pytest.raises(ValueError, match="positive"):
            classify(M15, 0.0)

    @pytest.mark.parametrize("tf", ALL_TIMEFRAMES)
    def test_small_reference_price_that_drives_supports_negative_raises(self, tf):
        with pytest.raises(ValueError, match="positive"):
            classify(tf, 0.0015)

    def test_min_reference_price_is_deepest_support(self):
        assert min_reference_price() == pytest.approx(0.0045)
        zones = classify(D1, 0.0100)
        assert min(z.price for z in zones) == pytest.approx(0.0055)

    def test_check_zone_set_rejects_non_positive_price(self):
        zones = classify(M15, 0.0100)
        bad = PriceZone(
            kind="support", price=0.0, strength="strong", note="", timeframe=M15,
        )
        with pytest.raises(ZoneInvariantError, match="not positive"):
            check_zone_set(zones[:3] + [bad], 0.0100)

    def test_unknown_timeframe_raises_key_error(self):
        from fxpulse.analysis.models import Timeframe

        with pytest.raises(KeyError):
            classify(Timeframe(code="1w", label="1W", chart_interval="W"))

    def test_check_zone_set_rejects_short_set(self):
        zones = classify(M15)[:3]
        with pytest.raises(ZoneInvariantError, match="Expected 2 resistance"):
            check_zone_set(zones, BASE_REFERENCE_PRICE)

    def test_check_zone_set_rejects_misplaced_support(self):
        zones = classify(M15)
        bad = PriceZone(
            kind="support", price=1.0400, strength="weak", note="", timeframe=M15,
        )
        with pytest.raises(ZoneInvariantError, match="not below"):
            check_zone_set(zones[:3] + [bad], BASE_REFERENCE_PRICE)


# ── Setup generator ──────────────────────────────────────────────────────


class TestSetupGenerator:
    def test_15m_scenario(self):
        setups = generate(classify(M15, 1.0315), M15, 1.0315)

        long = setups.long
        assert long.direction == "long"
        assert long.entry_zone.low == pytest.approx(1.0300)
        assert long.entry_zone.high == pytest.approx(1.0310)
        assert long.entry_display == "1.0300-1.0310"
        assert long.take_profit == (pytest.approx(1.0330), pytest.approx(1.0345))
        assert long.risk_reward == "1:1.5"

    def test_15m_short_setup(self):
        short = generate(classify(M15), M15).short
        assert short.direction == "short"
        assert short.entry_display == "1.0320-1.0330"
        assert short.take_profit_display == "1.0300, 1.0285"

    def test_1d_risk_reward(self):
        setups = generate(classify(D1), D1)
        assert setups.long.risk_reward == "1:3"
        assert setups.short.risk_reward == "1:3"

    def test_1d_entry_uses_nearest_zone(self):
        setups = generate(classify(D1), D1)
        assert setups.long.entry_display == "1.0265-1.0295"
        assert setups.short.entry_display == "1.0355-1.0385"

    @pytest.mark.parametrize("tf", ALL_TIMEFRAMES, ids=lambda tf: tf.code)
    def test_take_profits_beyond_entry(self, tf):
        setups = generate(classify(tf), tf)
        assert all(tp > setups.long.entry_zone.high for tp in setups.long.take_profit)
        assert all(tp < setups.short.entry_zone.low for tp in setups.short.take_profit)

    @pytest.mark.parametrize("tf", ALL_TIMEFRAMES, ids=lambda tf: tf.code)
    def test_nearer_target_first(self, tf):
        setups = generate(classify(tf), tf)
        assert setups.long.take_profit[0] < setups.long.take_profit[1]
        assert setups.short.take_profit[0] > setups.short.take_profit[1]

    def test_risk_reward_lookup_is_pure(self):
        expected = {M15: "1:1.5", H1: "1:2", H4: "1:2.5", D1: "1:3"}
        for tf, rr in expected.items():
            assert risk_reward_for(tf) == rr
            assert risk_reward_for(tf) == risk_reward_for(tf)

    def test_notes_name_the_timeframe(self):
        setups = generate(classify(D1), D1)
        assert setups.long.note == "Wait for confirmation at 1D support"
        assert setups.short.note == "Watch for reversal at 1D resistance"

    def test_missing_zone_renders_unavailable(self):
        only_resistance = [z for z in classify(H1) if z.kind == "resistance"]
        setups = generate(only_resistance, H1)
        assert setups.long.entry_zone is None
        assert setups.long.entry_display == "N/A"
        assert setups.short.entry_zone is not None

    def test_zones_of_other_timeframe_are_ignored(self):
        assert entry_zone(classify(H4), H1, "support") is None

    def test_take_profit_bad_direction_raises(self):
        with pytest.raises(ValueError, match="direction"):
            take_profit(M15, "sideways")

    def test_setup_frozen(self):
        setup = generate(classify(M15), M15).long
        assert isinstance(setup, TradeSetup)
        with pytest.raises(AttributeError):
            setup.note = "changed"


# ── Indicator labels and bias ────────────────────────────────────────────


def _reading(name: str, label: str) -> IndicatorReading:
    return IndicatorReading(name=name, value=0.0, label=label)


class TestIndicatorLabels:
    def test_rsi_exactly_50_is_bearish(self):
        assert label_for("RSI", 50.0) == "bearish"

    def test_rsi_above_50_is_bullish(self):
        assert label_for("RSI", 50.01) == "bullish"

    def test_ma_threshold_is_strict(self):
        assert label_for("MA", 50.0) == "bearish"
        assert label_for("MA", 55.0) == "bullish"

    def test_macd_zero_is_bearish(self):
        assert label_for("MACD", 0.0) == "bearish"
        assert label_for("MACD", 0.5) == "bullish"
        assert label_for("MACD", -3.0) == "bearish"

    def test_unknown_indicator_raises(self):
        with pytest.raises(KeyError):
            label_for("ADX", 30.0)

    def test_to_readings_order_and_labels(self):
        readings = to_readings(IndicatorValues(rsi=50.0, macd=4.2, ma=41.0))
        assert [(r.name, r.label) for r in readings] == [
            ("RSI", "bearish"),
            ("MACD", "bullish"),
            ("MA", "bearish"),
        ]
        assert readings[1].value == pytest.approx(4.2)


class TestMarketBias:
    def test_all_bullish_is_buy(self):
        bias = market_bias(tuple(_reading(n, "bullish") for n in ("RSI", "MACD", "MA")))
        assert bias.signal == "BUY"
        assert bias.bullish_pct == pytest.approx(100.0)

    def test_all_bearish_is_sell(self):
        bias = market_bias(tuple(_reading(n, "bearish") for n in ("RSI", "MACD", "MA")))
        assert bias.signal == "SELL"
        assert bias.bearish_pct == pytest.approx(100.0)

    def test_mixed_is_wait(self):
        bias = market_bias((
            _reading("RSI", "bullish"),
            _reading("MACD", "bullish"),
            _reading("MA", "bearish"),
        ))
        assert bias.signal == "WAIT"
        assert bias.bullish_pct == pytest.approx(66.7)
        assert bias.bearish_pct == pytest.approx(33.3)

    def test_empty_readings_raise(self):
        with pytest.raises(ValueError):
            market_bias(())
