from __future__ import annotations

"""Concrete rate providers and factory.

'external-http' reads the public exchangerate-api.com table
(GET {base_url}/USD -> {"base": "USD", "rates": {...}}). 'static' serves a fixed
table for local development and demos without network access.
"""
import logging
from datetime import datetime
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from currency_converter.core.config import Settings
from currency_converter.core.errors import FetchError
from currency_converter.models.rates import RateSnapshot
from currency_converter.services.http_client import HttpError, get_json
from .base import RateProvider

logger = logging.getLogger("currency_converter.rates")

_STATIC_RATES: Dict[str, float] = {
    "USD": 1.0,
    "EUR": 0.92,
    "BRL": 5.0,
    "JPY": 149.5,
    "GBP": 0.79,
    "AUD": 1.52,
    "CAD": 1.36,
    "CHF": 0.88,
    "CNY": 7.24,
    "INR": 83.2,
    "MXN": 17.1,
}


def parse_rates_payload(data: Dict[str, Any], base: str) -> RateSnapshot:
    """Build a snapshot from the API body, consuming ``rates`` verbatim."""
    rates = data.get("rates")
    if not isinstance(rates, dict) or not rates:
        raise FetchError("response has no 'rates' mapping")
    try:
        return RateSnapshot(base=base, rates=rates, fetched_at=datetime.now())
    except ValidationError as e:
        raise FetchError(f"invalid rates payload: {e.errors()[0]['msg']}") from e


class StaticRateProvider(RateProvider):
    def __init__(self, rates: Optional[Dict[str, float]] = None):
        self._rates = dict(rates or _STATIC_RATES)

    async def fetch_snapshot(self) -> RateSnapshot:  # type: ignore[override]
        return RateSnapshot(base=self.base_currency, rates=dict(self._rates))


class ExternalHTTPRateProvider(RateProvider):
    def __init__(
        self,
        url: str,
        *,
        base_currency: str = "USD",
        timeout: float = 10.0,
        retries: int = 2,
        backoff: float = 0.5,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.base_currency = base_currency
        self._timeout = timeout
        self._retries = retries
        self._backoff = backoff
        self._transport = transport

    async def fetch_snapshot(self) -> RateSnapshot:  # type: ignore[override]
        try:
            data = await get_json(
                self.url,
                timeout=self._timeout,
                retries=self._retries,
                backoff=self._backoff,
                transport=self._transport,
            )
        except HttpError as e:
            raise FetchError(str(e)) from e
        snapshot = parse_rates_payload(data, self.base_currency)
        logger.info("fetched rates", extra={"count": len(snapshot.rates)})
        return snapshot


def _make_static(settings: Settings) -> RateProvider:
    provider = StaticRateProvider()
    provider.base_currency = settings.base_currency
    return provider


def _make_external_http(settings: Settings) -> RateProvider:
    return ExternalHTTPRateProvider(
        settings.rates_url,
        base_currency=settings.base_currency,
        timeout=settings.http_timeout_seconds,
        retries=settings.http_retries,
        backoff=settings.http_backoff_seconds,
    )


_PROVIDER_REGISTRY = {
    "static": _make_static,
    "external-http": _make_external_http,
}


def make_rate_provider(kind: str, settings: Settings) -> RateProvider:
    factory = _PROVIDER_REGISTRY.get(kind)
    if not factory:
        raise ValueError(f"Unknown rate provider kind '{kind}'")
    return factory(settings)


async def fetch_rates(provider: RateProvider) -> RateSnapshot:
    """Fetch a new snapshot; any failure surfaces as FetchError."""
    try:
        return await provider.fetch_snapshot()
    except FetchError:
        raise
    except (httpx.HTTPError, ValueError, TypeError) as e:
        raise FetchError(str(e)) from e
