"""FxPulse exception hierarchy.

All application-specific exceptions inherit from :class:`FxPulseError` so the
host can tell engine failures apart from library errors.
"""


class FxPulseError(Exception):
    """Base exception for all FxPulse errors."""


# ── Input validation ─────────────────────────────────────────────────────


class InvalidTimeframeError(FxPulseError, ValueError):
    """A timeframe code that is not in the catalog."""

    def __init__(self, code: str, available: list[str]) -> None:
        self.code = code
        self.available = available
        super().__init__(
            f"Unknown timeframe '{code}'. Available: {', '.join(available)}"
        )


# ── Indicator feed ───────────────────────────────────────────────────────


class IndicatorPollError(FxPulseError):
    """An indicator source could not produce a reading."""


# ── Engine ───────────────────────────────────────────────────────────────


class EngineNotReadyError(FxPulseError):
    """The engine was observed before its first computation."""


class ZoneInvariantError(FxPulseError):
    """The zone classifier produced a zone set the engine cannot use."""
