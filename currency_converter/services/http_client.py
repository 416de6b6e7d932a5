from __future__ import annotations

"""Lightweight async HTTP helper: GET JSON with limited retries.

A transport can be injected so tests (and the static provider demos) never
touch the network.
"""
import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger("currency_converter.http")


class HttpError(Exception):
    pass


async def get_json(
    url: str,
    *,
    timeout: float = 10.0,
    retries: int = 2,
    backoff: float = 0.5,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict[str, Any]:
    last_err: Optional[Exception] = None
    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        for attempt in range(retries + 1):
            try:
                resp = await client.get(url)
                if resp.status_code >= 400:
                    raise HttpError(f"HTTP {resp.status_code} for {url}")
                data = resp.json()
                if not isinstance(data, dict):
                    raise HttpError(f"Expected a JSON object from {url}")
                return data
            except (httpx.HTTPError, HttpError, ValueError) as e:  # ValueError for JSON decode
                last_err = e
                logger.warning(
                    "GET failed (%s)", e, extra={"url": url, "attempt": attempt + 1}
                )
                if attempt == retries:
                    break
                await asyncio.sleep(backoff * (2**attempt))
    raise HttpError(f"Failed to fetch JSON from {url}: {last_err}")
