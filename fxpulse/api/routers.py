"""Presentation API routers — /timeframes, /analysis, /chart endpoints.

No analysis logic here.  Delegates to the engine injected at startup.
"""

import logging
from typing import Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from fxpulse.analysis.timeframes import all_timeframes
from fxpulse.errors import EngineNotReadyError, InvalidTimeframeError

logger = logging.getLogger("fxpulse.api")
router = APIRouter()

# ── Shared state (set during app startup) ────────────────────────────────

_engine = None  # Set via configure_routers()
_symbol: str = "FX:EURUSD"  # Set via configure_routers()


def configure_routers(engine=None, symbol: Optional[str] = None) -> None:
    """Inject dependencies from the application startup.

    Args:
        engine: A ``MarketAnalysisEngine`` (or duck-type for tests).
        symbol: Charting widget symbol.
    """
    global _engine, _symbol  # noqa: PLW0603
    _engine = engine
    if symbol is not None:
        _symbol = symbol


def _unavailable(reason: str) -> JSONResponse:
    return JSONResponse(status_code=503, content={"error": reason})


# ── Endpoints ────────────────────────────────────────────────────────────


@router.get("/timeframes")
async def get_timeframes():
    """Return the timeframe picker entries."""
    return {
        "timeframes": [
            {"code": tf.code, "label": tf.label} for tf in all_timeframes()
        ]
    }


@router.get("/analysis")
async def get_analysis():
    """Return the latest analysis snapshot."""
    if _engine is None:
        return _unavailable("No engine configured")
    try:
        return _engine.current_snapshot().to_dict()
    except EngineNotReadyError as exc:
        return _unavailable(str(exc))


@router.post("/analysis/timeframe")
async def post_timeframe(body: dict):
    """Switch the active timeframe and return the recomputed snapshot.

    An unknown code is rejected with 422; the previous snapshot stays live.
    """
    if _engine is None:
        return _unavailable("No engine configured")

    code = body.get("timeframe")
    if not isinstance(code, str):
        return JSONResponse(
            status_code=422, content={"error": "timeframe must be a string"},
        )
    try:
        snapshot = await _engine.select(code)
    except InvalidTimeframeError as exc:
        logger.info("Rejected timeframe change: %s", exc)
        return JSONResponse(
            status_code=422,
            content={"error": str(exc), "available": exc.available},
        )
    return snapshot.to_dict()


@router.post("/analysis/refresh")
async def post_refresh():
    """Force an immediate refresh outside the scheduler cadence."""
    if _engine is None:
        return _unavailable("No engine configured")
    snapshot = await _engine.refresh()
    return snapshot.to_dict()


@router.get("/chart")
async def get_chart():
    """Return what the charting widget needs: symbol and interval."""
    interval = None
    if _engine is not None:
        interval = _engine.timeframe.chart_interval
    return {"symbol": _symbol, "interval": interval}
