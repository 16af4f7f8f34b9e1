from __future__ import annotations

"""Exchange rate fetcher backed by exchangerate-api.com.

One GET of ``{base_url}/USD`` per refresh, no retries. Results are cached in a
TimedCache owned by the application context; on failure the last good table
is served if there is one.
"""
import logging
from typing import Optional

import httpx

from wealth_ranker.core.errors import UpstreamFetchError
from wealth_ranker.models.rates import BASE_CURRENCY, RateTable
from wealth_ranker.services.cache import TimedCache
from wealth_ranker.services.http_client import HttpError, get_json

logger = logging.getLogger(__name__)


class ExchangeRateFetcher:
    def __init__(
        self,
        base_url: str,
        cache: TimedCache[RateTable],
        *,
        timeout: float = 10.0,
        user_agent: str = "WealthRanker/1.0",
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._url = f"{base_url.rstrip('/')}/{BASE_CURRENCY}"
        self._cache = cache
        self._timeout = timeout
        self._headers = {"User-Agent": user_agent}
        self._transport = transport

    @property
    def url(self) -> str:
        return self._url

    def fetch_rates(self) -> RateTable:
        return self._cache.get_or_refresh(self._load)

    def _load(self) -> RateTable:
        logger.info("fetching fresh exchange rates", extra={"endpoint": self._url})
        try:
            payload = get_json(
                self._url,
                timeout=self._timeout,
                headers=self._headers,
                transport=self._transport,
            )
            if not isinstance(payload, dict):
                raise ValueError("rate payload is not a JSON object")
            table = RateTable.from_payload(payload)
        except (HttpError, ValueError) as e:
            logger.error(
                "exchange rate fetch failed: %s", e, extra={"endpoint": self._url}
            )
            raise UpstreamFetchError(
                "Failed to fetch exchange rates",
                source=self._url,
                hint="Please try again in a few minutes or check if the exchange rate API is accessible",
            ) from e
        logger.info(
            "fetched %d exchange rates",
            len(table.rates),
            extra={"endpoint": self._url, "rates_date": table.date},
        )
        return table
