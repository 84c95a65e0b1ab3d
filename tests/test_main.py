"""Tests for the CLI wiring in fxpulse.main."""

import pytest

from fxpulse.config import Config
from fxpulse.main import _build_engine, _run_once


def _make_config(**overrides) -> Config:
    defaults = dict(
        symbol="FX:EURUSD",
        reference_price=1.0315,
        default_timeframe="15m",
        refresh_seconds=5.0,
        poll_timeout_seconds=1.0,
        feed_url=None,
        feed_token=None,
        log_level="WARNING",
        http_port=8080,
    )
    defaults.update(overrides)
    return Config(**defaults)


class TestBuildEngine:
    @pytest.mark.asyncio
    async def test_builds_initialised_engine(self):
        engine = await _build_engine(_make_config(default_timeframe="1h"), None)
        assert engine.ready is True
        assert engine.current_snapshot().timeframe.code == "1h"
        assert len(engine.current_snapshot().indicators) == 3

    @pytest.mark.asyncio
    async def test_timeframe_argument_selects(self):
        engine = await _build_engine(_make_config(), "4h")
        assert engine.current_snapshot().timeframe.code == "4h"

    @pytest.mark.asyncio
    async def test_run_once_prints_snapshot(self, capsys):
        await _run_once(_make_config(), "1d")
        out = capsys.readouterr().out
        assert "FxPulse Analysis" in out
        assert "Timeframe:       1D" in out
        assert "R:R 1:3" in out
