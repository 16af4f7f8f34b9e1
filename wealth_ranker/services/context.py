from __future__ import annotations

"""Application context: the caches and fetchers shared by every request.

Created once by ``create_app`` and stored on ``app.state.context``. Holds no
external resources (HTTP clients are opened per fetch), so there is nothing to
tear down.
"""
import logging
import random
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional

import httpx
from fastapi import Request

from wealth_ranker.core.config import Settings
from wealth_ranker.models.country import Country
from wealth_ranker.models.rates import RateTable
from wealth_ranker.models.ranking import RankingResult
from wealth_ranker.services.cache import TimedCache, utcnow
from wealth_ranker.services.countries import CountryCatalog, CountryCatalogFetcher
from wealth_ranker.services.countries.facts import Selector
from wealth_ranker.services.ranking import rank, validate_request
from wealth_ranker.services.rates import ExchangeRateFetcher

logger = logging.getLogger(__name__)


class AppContext:
    def __init__(
        self,
        settings: Settings,
        *,
        transport: Optional[httpx.BaseTransport] = None,
        clock: Callable[[], datetime] = utcnow,
        choose: Selector = random.choice,
    ):
        self.settings = settings
        self.rates_cache: TimedCache[RateTable] = TimedCache(
            timedelta(seconds=settings.rates_cache_ttl_seconds),
            name="exchange_rates",
            clock=clock,
        )
        self.countries_cache: TimedCache[CountryCatalog] = TimedCache(
            timedelta(seconds=settings.countries_cache_ttl_seconds),
            name="countries",
            clock=clock,
        )
        self.rate_fetcher = ExchangeRateFetcher(
            settings.exchange_api_base_url,
            self.rates_cache,
            timeout=settings.http_timeout_seconds,
            user_agent=settings.user_agent,
            transport=transport,
        )
        self.country_fetcher = CountryCatalogFetcher(
            settings.country_api_endpoints,
            self.countries_cache,
            timeout=settings.http_timeout_seconds,
            user_agent=settings.user_agent,
            transport=transport,
            choose=choose,
        )

    def health_check(self) -> Dict[str, str]:
        return {"status": "ok", "message": "Wealth Ranker API is running"}

    def get_rates(self) -> RateTable:
        return self.rate_fetcher.fetch_rates()

    def get_countries(self) -> tuple[Country, ...]:
        return self.country_fetcher.fetch_countries()

    def calculate_ranking(
        self, wealth: Optional[float], currency: Optional[str]
    ) -> RankingResult:
        # Reject bad input before touching caches or the network.
        wealth, currency = validate_request(wealth, currency)
        logger.info("calculating ranking", extra={"wealth": wealth, "currency": currency})
        rates = self.get_rates()
        countries = self.get_countries()
        return rank(wealth, currency, rates.rates, countries)


def get_context(request: Request) -> AppContext:
    """FastAPI dependency returning the context built by create_app."""
    return request.app.state.context
