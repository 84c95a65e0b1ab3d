"""Indicator source registry — maps feed kinds to source factories.

Used by the CLI to build the feed named by ``Config.feed_kind``.
"""

from fxpulse.config import Config
from fxpulse.feeds.base import IndicatorSource
from fxpulse.feeds.http_source import HttpIndicatorSource, split_poll_budget
from fxpulse.feeds.random_source import RandomIndicatorSource


def _build_random(config: Config) -> IndicatorSource:
    return RandomIndicatorSource()


def _build_http(config: Config) -> IndicatorSource:
    # Retries must finish inside the engine's poll timeout.
    timeout, retry_base_delay = split_poll_budget(config.poll_timeout_seconds)
    return HttpIndicatorSource(
        url=config.feed_url,
        token=config.feed_token,
        timeout=timeout,
        retry_base_delay=retry_base_delay,
    )


SOURCE_REGISTRY: dict = {
    "random": _build_random,
    "http": _build_http,
}


def get_source(config: Config) -> IndicatorSource:
    """Build the indicator source selected by *config*.

    Raises ``KeyError`` if the feed kind is not registered.
    """
    kind = config.feed_kind
    if kind not in SOURCE_REGISTRY:
        raise KeyError(
            f"Unknown feed '{kind}'. "
            f"Available: {', '.join(SOURCE_REGISTRY.keys())}"
        )
    return SOURCE_REGISTRY[kind](config)
