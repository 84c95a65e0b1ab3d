"""FxPulse — application configuration.

Loads .env variables into a typed config object for the host process.
The analysis engine itself takes plain arguments and never reads the
environment.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from fxpulse.analysis.policy import min_reference_price
from fxpulse.analysis.timeframes import get_timeframe


@dataclass(frozen=True)
class Config:
    """Typed configuration loaded from environment variables."""

    symbol: str  # charting widget symbol, e.g. "FX:EURUSD"
    reference_price: float
    default_timeframe: str
    refresh_seconds: float
    poll_timeout_seconds: float
    feed_url: Optional[str]  # None = random placeholder feed
    feed_token: Optional[str]
    log_level: str
    http_port: int

    @property
    def feed_kind(self) -> str:
        """Return ``"http"`` when a feed URL is configured, else ``"random"``."""
        return "http" if self.feed_url else "random"


def _float_var(name: str, default: str) -> float:
    raw = os.environ.get(name, default)
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got '{raw}'") from None


def _int_var(name: str, default: str) -> int:
    raw = os.environ.get(name, default)
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{raw}'") from None


def load_config(env_path: str | None = None) -> Config:
    """Load configuration from environment variables.

    Every variable is optional.  Raises ``ValueError`` naming the variable
    when a value is malformed or out of range.
    """
    load_dotenv(dotenv_path=env_path)

    reference_price = _float_var("FXPULSE_REFERENCE_PRICE", "1.0315")
    floor = min_reference_price()
    if reference_price <= floor:
        raise ValueError(
            f"FXPULSE_REFERENCE_PRICE must be above {floor:.4f} so every zone "
            f"price stays positive"
        )

    refresh_seconds = _float_var("FXPULSE_REFRESH_SECONDS", "5")
    if refresh_seconds <= 0:
        raise ValueError("FXPULSE_REFRESH_SECONDS must be positive")

    poll_timeout = _float_var("FXPULSE_POLL_TIMEOUT_SECONDS", "10")
    if poll_timeout <= 0:
        raise ValueError("FXPULSE_POLL_TIMEOUT_SECONDS must be positive")

    default_timeframe = os.environ.get("FXPULSE_DEFAULT_TIMEFRAME", "15m")
    try:
        default_timeframe = get_timeframe(default_timeframe).code
    except ValueError as exc:
        raise ValueError(f"FXPULSE_DEFAULT_TIMEFRAME: {exc}") from None

    return Config(
        symbol=os.environ.get("FXPULSE_SYMBOL", "FX:EURUSD"),
        reference_price=reference_price,
        default_timeframe=default_timeframe,
        refresh_seconds=refresh_seconds,
        poll_timeout_seconds=poll_timeout,
        feed_url=os.environ.get("FXPULSE_FEED_URL") or None,
        feed_token=os.environ.get("FXPULSE_FEED_TOKEN") or None,
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
        http_port=_int_var("HTTP_PORT", "8080"),
    )
