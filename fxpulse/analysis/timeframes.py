"""Timeframe catalog — the fixed set of analysis intervals. Pure lookups."""

from fxpulse.analysis.models import Timeframe
from fxpulse.errors import InvalidTimeframeError


M15 = Timeframe(code="15m", label="15m", chart_interval="15")
H1 = Timeframe(code="1h", label="1h", chart_interval="60")
H4 = Timeframe(code="4h", label="4h", chart_interval="240")
D1 = Timeframe(code="1d", label="1D", chart_interval="D")

_CATALOG: tuple[Timeframe, ...] = (M15, H1, H4, D1)
_BY_CODE: dict[str, Timeframe] = {tf.code: tf for tf in _CATALOG}

DEFAULT_TIMEFRAME = M15


def all_timeframes() -> tuple[Timeframe, ...]:
    """Return every supported timeframe, shortest first."""
    return _CATALOG


def display_label(timeframe: Timeframe) -> str:
    """Return the label shown in the timeframe picker."""
    return timeframe.label


def get_timeframe(code: str) -> Timeframe:
    """Resolve a timeframe code such as ``"4h"`` or ``"1D"``.

    Raises ``InvalidTimeframeError`` if the code is not in the catalog.
    """
    key = code.strip().lower() if isinstance(code, str) else ""
    if key not in _BY_CODE:
        raise InvalidTimeframeError(str(code), list(_BY_CODE.keys()))
    return _BY_CODE[key]
