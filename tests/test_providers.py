"""
Rate provider tests using httpx.MockTransport (no network).
"""

import httpx
import pytest

from currency_converter.core.config import Settings
from currency_converter.core.errors import FetchError
from currency_converter.services.http_client import HttpError, get_json
from currency_converter.services.rates.providers import (
    ExternalHTTPRateProvider,
    StaticRateProvider,
    fetch_rates,
    make_rate_provider,
    parse_rates_payload,
)

URL = "https://api.exchangerate-api.com/v4/latest/USD"


def _provider(handler, retries=0):
    return ExternalHTTPRateProvider(
        URL, retries=retries, backoff=0, transport=httpx.MockTransport(handler)
    )


@pytest.mark.asyncio
async def test_external_http_consumes_rates_mapping():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(
            200, json={"base": "USD", "date": "2026-10-17", "rates": {"USD": 1, "BRL": 5.43, "EUR": 0.86}}
        )

    snapshot = await fetch_rates(_provider(handler))
    assert seen == [URL]
    assert snapshot.base == "USD"
    assert snapshot.rates == {"USD": 1.0, "BRL": 5.43, "EUR": 0.86}


@pytest.mark.asyncio
async def test_http_error_status_is_fetch_error():
    provider = _provider(lambda request: httpx.Response(500, text="boom"))
    with pytest.raises(FetchError):
        await fetch_rates(provider)


@pytest.mark.asyncio
async def test_connection_failure_is_fetch_error():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(FetchError):
        await fetch_rates(_provider(handler))


@pytest.mark.asyncio
async def test_retries_then_succeeds():
    calls = {"n": 0}

    def handler(request):
        calls["n"] += 1
        if calls["n"] == 1:
            return httpx.Response(503)
        return httpx.Response(200, json={"rates": {"USD": 1, "BRL": 5}})

    snapshot = await fetch_rates(_provider(handler, retries=2))
    assert calls["n"] == 2
    assert snapshot.rate_for("BRL") == 5.0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"result": "error"},
        {"rates": {}},
        {"rates": {"USD": 1, "BRL": -5}},
        {"rates": {"USD": 1, "BRL": "abc"}},
    ],
)
async def test_bad_payload_is_fetch_error(body):
    with pytest.raises(FetchError):
        await fetch_rates(_provider(lambda request: httpx.Response(200, json=body)))


@pytest.mark.asyncio
async def test_invalid_json_is_fetch_error():
    provider = _provider(lambda request: httpx.Response(200, text="<html>"))
    with pytest.raises(FetchError):
        await fetch_rates(provider)


@pytest.mark.asyncio
async def test_get_json_rejects_non_object():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=[1, 2]))
    with pytest.raises(HttpError):
        await get_json(URL, retries=0, transport=transport)


def test_parse_adds_missing_base():
    snapshot = parse_rates_payload({"rates": {"BRL": 5.0}}, "USD")
    assert snapshot.rate_for("USD") == 1.0


@pytest.mark.asyncio
async def test_static_provider_returns_fixed_table():
    snapshot = await StaticRateProvider({"USD": 1.0, "BRL": 5.0}).fetch_snapshot()
    assert snapshot.rates == {"USD": 1.0, "BRL": 5.0}


def test_factory(tmp_path):
    settings = Settings(data_dir=tmp_path, exchange_rate_provider="external-http")
    settings.init_post_load()
    provider = make_rate_provider("external-http", settings)
    assert isinstance(provider, ExternalHTTPRateProvider)
    assert provider.url == URL
    assert isinstance(make_rate_provider("static", settings), StaticRateProvider)
    with pytest.raises(ValueError):
        make_rate_provider("carrier-pigeon", settings)


def test_unknown_provider_setting_rejected(tmp_path):
    settings = Settings(data_dir=tmp_path, exchange_rate_provider="nope")
    with pytest.raises(ValueError):
        settings.init_post_load()
