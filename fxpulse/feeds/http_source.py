"""HTTP indicator feed — async client for an external indicator service.

The service is expected to answer ``GET <url>`` with a JSON object holding
numeric (or numeric-string) ``rsi``, ``macd`` and ``ma`` fields.  Every
failure surfaces as ``IndicatorPollError`` so the engine can keep its last
good readings.
"""

import asyncio
import logging
import math
from typing import Optional

import httpx

from fxpulse.analysis.models import IndicatorValues
from fxpulse.errors import IndicatorPollError

logger = logging.getLogger("fxpulse.feeds.http")

# Retry settings
_MAX_RETRIES = 3
_RETRY_BASE_DELAY = 1.0  # seconds; doubles each attempt
_RETRYABLE_STATUS_CODES = {502, 503, 504, 429}
# Share of the poll budget the attempts and backoff may use
_BUDGET_SHARE = 0.8


def split_poll_budget(
    budget: float,
    max_retries: int = _MAX_RETRIES,
    retry_base_delay: float = _RETRY_BASE_DELAY,
) -> tuple[float, float]:
    """Return ``(timeout, retry_base_delay)`` so every attempt fits in *budget*.

    The backoff base is shrunk if the default delays alone would take more
    than half of the usable budget; the per-request timeout gets the rest,
    divided evenly across attempts.
    """
    attempts = max(1, max_retries)
    backoff_units = 2 ** (attempts - 1) - 1  # sum of the doubling waits
    usable = budget * _BUDGET_SHARE
    if backoff_units:
        retry_base_delay = min(retry_base_delay, usable / 2 / backoff_units)
    else:
        retry_base_delay = 0.0
    timeout = (usable - retry_base_delay * backoff_units) / attempts
    return timeout, retry_base_delay


class HttpIndicatorSource:
    """Polls indicator readings from an HTTP endpoint.

    Args:
        url: Full URL of the indicator document.
        token: Optional bearer token.
        timeout: Per-request timeout in seconds.
        max_retries: Attempts before giving up.
        retry_base_delay: First backoff delay in seconds.
    """

    def __init__(
        self,
        url: str,
        token: Optional[str] = None,
        timeout: float = 5.0,
        max_retries: int = _MAX_RETRIES,
        retry_base_delay: float = _RETRY_BASE_DELAY,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._max_retries = max(1, max_retries)
        self._retry_base_delay = retry_base_delay
        self._headers = {"Accept": "application/json"}
        if token:
            self._headers["Authorization"] = f"Bearer {token}"

    @property
    def worst_case_seconds(self) -> float:
        """Longest a poll can take: every attempt timing out plus all waits."""
        waits = self._retry_base_delay * (2 ** (self._max_retries - 1) - 1)
        return self._max_retries * self._timeout + waits

    # ── Retry helper ─────────────────────────────────────────────────────

    async def _get_with_retry(self) -> httpx.Response:
        """GET the indicator document with exponential-backoff retry.

        Retries on transient server errors (502, 503, 504) and rate-limits
        (429).  Other HTTP errors are raised immediately.
        """
        last_exc: Optional[Exception] = None

        for attempt in range(self._max_retries):
            delay = self._retry_base_delay * (2 ** attempt)
            last_attempt = attempt == self._max_retries - 1
            try:
                async with httpx.AsyncClient() as client:
                    resp = await client.get(
                        self._url,
                        headers=self._headers,
                        timeout=self._timeout,
                    )

                if resp.status_code in _RETRYABLE_STATUS_CODES:
                    logger.warning(
                        "Indicator feed returned %d — retry %d/%d in %.1fs",
                        resp.status_code, attempt + 1, self._max_retries, delay,
                    )
                    last_exc = httpx.HTTPStatusError(
                        f"Server error '{resp.status_code}'",
                        request=resp.request,
                        response=resp,
                    )
                    if not last_attempt:
                        await asyncio.sleep(delay)
                    continue

                resp.raise_for_status()
                return resp

            except httpx.TransportError as exc:
                logger.warning(
                    "Indicator feed transport error (%s) — retry %d/%d in %.1fs",
                    exc, attempt + 1, self._max_retries, delay,
                )
                last_exc = exc
                if not last_attempt:
                    await asyncio.sleep(delay)

        raise last_exc  # type: ignore[misc]

    # ── Poll ─────────────────────────────────────────────────────────────

    async def poll(self) -> IndicatorValues:
        """Fetch and parse the current indicator values.

        Raises:
            IndicatorPollError: On HTTP failure or a malformed payload.
        """
        try:
            resp = await self._get_with_retry()
        except httpx.HTTPError as exc:
            raise IndicatorPollError(f"Indicator feed request failed: {exc}") from exc

        try:
            data = resp.json()
            values = IndicatorValues(
                rsi=float(data["rsi"]),
                macd=float(data["macd"]),
                ma=float(data["ma"]),
            )
        except (ValueError, KeyError, TypeError) as exc:
            raise IndicatorPollError(
                f"Malformed indicator payload: {exc!r}"
            ) from exc

        # json() accepts NaN and Infinity literals
        for name, value in (("rsi", values.rsi), ("macd", values.macd), ("ma", values.ma)):
            if not math.isfinite(value):
                raise IndicatorPollError(
                    f"Malformed indicator payload: {name} is {value}"
                )
        return values
