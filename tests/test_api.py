from conftest import COUNTRY_ENDPOINTS, RATES_BASE, rates_payload, v3_record

RATES_URL = f"{RATES_BASE}/USD"


def seed(upstream):
    upstream.reply(RATES_URL, rates_payload(INR=83.0, JPY=150.0))
    upstream.reply(
        COUNTRY_ENDPOINTS[0],
        [
            v3_record("India", "INR"),
            v3_record("Japan", "JPY"),
            v3_record("Testland", "XYZ"),
            {"name": {}},
        ],
    )


def test_health(client, upstream):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "message": "Wealth Ranker API is running"}
    assert "X-Request-ID" in resp.headers
    assert upstream.requests == []


def test_root(client):
    assert client.get("/").json() == {"message": "Wealth Ranker API", "version": "1.0.0"}


def test_exchange_rates(client, upstream):
    seed(upstream)
    resp = client.get("/api/exchange-rates")
    assert resp.status_code == 200
    body = resp.json()
    assert body["base"] == "USD"
    assert body["rates"]["INR"] == 83.0


def test_countries_are_camel_cased(client, upstream):
    seed(upstream)
    resp = client.get("/api/countries")
    assert resp.status_code == 200
    body = resp.json()
    assert [c["name"] for c in body] == ["India", "Japan", "Testland"]
    india = body[0]
    assert india["currencyCode"] == "INR"
    assert india["officialName"] == "Republic of India"
    assert india["flagGlyph"] == "🇮🇳"
    assert india["flagImageUrl"] == "https://flags.test/India.png"
    assert india["descriptiveFact"].startswith("India has a population of 5.0 million people")


def test_calculate_ranking(client, upstream):
    seed(upstream)
    resp = client.post("/api/calculate-ranking", json={"wealth": 1_000_000_000, "currency": "INR"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["originalWealth"] == 1_000_000_000
    assert body["originalCurrency"] == "INR"
    assert abs(body["wealthInUSD"] - 12_048_192.77) < 0.01
    assert body["totalCountries"] == 2
    assert body["billionaireCountries"] == 2
    assert body["millionaireCountries"] == 0
    first = body["countries"][0]
    assert first["name"] == "Japan"
    assert first["status"] == "billionaire"
    assert first["wealthInMillions"] == 0


def test_cached_data_reused_across_requests(client, upstream):
    seed(upstream)
    client.get("/api/countries")
    client.post("/api/calculate-ranking", json={"wealth": 5_000_000, "currency": "USD"})
    client.post("/api/calculate-ranking", json={"wealth": 9_000_000, "currency": "JPY"})
    assert upstream.calls_to(RATES_URL) == 1
    assert upstream.calls_to(COUNTRY_ENDPOINTS[0]) == 1


def test_missing_fields_rejected_before_any_fetch(client, upstream):
    seed(upstream)
    for payload in ({"currency": "USD"}, {"wealth": 1000}, {}):
        resp = client.post("/api/calculate-ranking", json=payload)
        assert resp.status_code == 400
        assert resp.json() == {
            "error": "validation_error",
            "detail": "Wealth and currency are required",
        }
    assert upstream.requests == []


def test_malformed_wealth_is_422(client):
    resp = client.post("/api/calculate-ranking", json={"wealth": "lots", "currency": "USD"})
    assert resp.status_code == 422
    assert resp.json()["error"] == "validation_error"


def test_unknown_source_currency(client, upstream):
    seed(upstream)
    resp = client.post("/api/calculate-ranking", json={"wealth": 100, "currency": "XYZ"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "unknown_currency"
    assert "XYZ" in resp.json()["detail"]


def test_upstream_failure_without_cache(client, upstream):
    for url in COUNTRY_ENDPOINTS:
        upstream.fail(url)
    resp = client.get("/api/countries")
    assert resp.status_code == 502
    body = resp.json()
    assert body["error"] == "upstream_unavailable"
    assert body["detail"] == "All API endpoints failed"
    assert "restcountries.com" in body["tip"]


def test_rates_failure_without_cache(client, upstream):
    upstream.fail(RATES_URL)
    resp = client.get("/api/exchange-rates")
    assert resp.status_code == 502
    assert resp.json()["detail"] == "Failed to fetch exchange rates"


def test_stale_data_served_after_expiry(client, upstream, clock):
    seed(upstream)
    fresh = client.get("/api/exchange-rates").json()
    clock.advance(hours=2)
    upstream.fail(RATES_URL)
    resp = client.get("/api/exchange-rates")
    assert resp.status_code == 200
    assert resp.json() == fresh


def test_unknown_route(client):
    resp = client.get("/api/nope")
    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"


def test_every_upstream_call_uses_configured_timeout(client, upstream, settings):
    seed(upstream)
    client.post("/api/calculate-ranking", json={"wealth": 5_000_000, "currency": "USD"})

    urls = [str(r.url) for r in upstream.requests]
    assert urls == [RATES_URL, COUNTRY_ENDPOINTS[0]]
    for request in upstream.requests:
        timeout = request.extensions["timeout"]
        assert set(timeout.values()) == {settings.http_timeout_seconds}
    assert settings.http_timeout_seconds == 10.0


def test_overflowing_wealth_is_rejected(client, upstream):
    seed(upstream)
    resp = client.post("/api/calculate-ranking", json={"wealth": 1e308, "currency": "JPY"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "validation_error"
