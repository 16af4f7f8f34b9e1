from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from wealth_ranker.core.config import Settings
from wealth_ranker.main import create_app
from wealth_ranker.services.context import AppContext

RATES_BASE = "https://rates.test/v4/latest"
COUNTRY_ENDPOINTS = [
    "https://countries.test/v3.1/all-fields",
    "https://countries.test/v3.1/all",
    "https://countries.test/v2/all",
]


class FakeClock:
    def __init__(self, start: datetime = datetime(2024, 1, 1, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class FakeUpstream:
    """Routes requests by full URL; records every request it sees."""

    def __init__(self):
        self.replies: Dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: List[httpx.Request] = []

    def reply(self, url: str, payload: Any = None, *, status: int = 200) -> None:
        self.replies[url] = lambda request: httpx.Response(status, json=payload)

    def fail(self, url: str, exc: Optional[Exception] = None) -> None:
        def raise_(request):
            raise exc or httpx.ConnectTimeout("timed out", request=request)

        self.replies[url] = raise_

    def calls_to(self, url: str) -> int:
        return sum(1 for r in self.requests if str(r.url) == url)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        reply = self.replies.get(str(request.url))
        if reply is None:
            return httpx.Response(404, json={"error": "not found"})
        return reply(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def rates_payload(**rates: float) -> dict:
    return {"base": "USD", "date": "2024-01-01", "rates": {"USD": 1.0, **rates}}


def v3_record(name: str, currency: str = "USD", **extra) -> dict:
    record = {
        "name": {"common": name, "official": f"Republic of {name}"},
        "currencies": {currency: {"name": f"{name} money", "symbol": "¤"}},
        "flags": {"png": f"https://flags.test/{name}.png", "svg": f"https://flags.test/{name}.svg"},
        "region": "Testregion",
        "subregion": "",
        "population": 5_000_000,
        "capital": [f"{name} City"],
        "languages": {"eng": "English"},
        "cca2": name[:2].upper(),
    }
    record.update(extra)
    return record


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        exchange_api_base_url=RATES_BASE,
        country_api_endpoints=COUNTRY_ENDPOINTS,
        rates_cache_ttl_seconds=3600,
        countries_cache_ttl_seconds=86400,
    )


@pytest.fixture
def first_fact() -> Callable:
    return lambda pool: pool[0]


@pytest.fixture
def context(settings, upstream, clock, first_fact) -> AppContext:
    return AppContext(settings, transport=upstream.transport, clock=clock, choose=first_fact)


@pytest.fixture
def client(settings, context) -> TestClient:
    return TestClient(create_app(settings, context=context))
