from __future__ import annotations

"""Country catalog fetcher with endpoint-variant fallback.

Endpoints are tried in order; the first one returning a non-empty JSON list
wins. Request errors and empty or non-list bodies move on to the next
variant. The normalized catalog is cached as an immutable tuple.
"""
import logging
import random
from typing import List, Optional, Sequence, Tuple

import httpx

from wealth_ranker.core.errors import UpstreamFetchError
from wealth_ranker.models.country import Country
from wealth_ranker.services.cache import TimedCache
from wealth_ranker.services.http_client import HttpError, get_json

from .facts import Selector
from .normalize import normalize_records

logger = logging.getLogger(__name__)

CountryCatalog = Tuple[Country, ...]

UNREACHABLE_HINT = (
    "Please try again in a few minutes or check if restcountries.com is accessible"
)


class CountryCatalogFetcher:
    def __init__(
        self,
        endpoints: Sequence[str],
        cache: TimedCache[CountryCatalog],
        *,
        timeout: float = 10.0,
        user_agent: str = "WealthRanker/1.0",
        transport: Optional[httpx.BaseTransport] = None,
        choose: Selector = random.choice,
    ):
        if not endpoints:
            raise ValueError("at least one country endpoint is required")
        self.endpoints: Tuple[str, ...] = tuple(endpoints)
        self._cache = cache
        self._timeout = timeout
        self._headers = {"User-Agent": user_agent}
        self._transport = transport
        self._choose = choose

    def fetch_countries(self) -> CountryCatalog:
        return self._cache.get_or_refresh(self._load)

    def _fetch_first_available(self) -> List[dict]:
        for endpoint in self.endpoints:
            logger.info("trying country endpoint", extra={"endpoint": endpoint})
            try:
                data = get_json(
                    endpoint,
                    timeout=self._timeout,
                    headers=self._headers,
                    transport=self._transport,
                )
            except HttpError as e:
                logger.warning("country endpoint failed: %s", e, extra={"endpoint": endpoint})
                continue
            if isinstance(data, list) and data:
                logger.info(
                    "fetched %d raw country records", len(data), extra={"endpoint": endpoint}
                )
                return data
            logger.warning("country endpoint returned no records", extra={"endpoint": endpoint})
        raise UpstreamFetchError(
            "All API endpoints failed",
            source=", ".join(self.endpoints),
            hint=UNREACHABLE_HINT,
        )

    def _load(self) -> CountryCatalog:
        countries = normalize_records(self._fetch_first_available(), self._choose)
        if not countries:
            raise UpstreamFetchError(
                "Country data contained no usable records",
                source=", ".join(self.endpoints),
                hint=UNREACHABLE_HINT,
            )
        logger.info("processed %d countries", len(countries))
        return countries
