from __future__ import annotations

"""Rate provider abstraction.

A provider returns one complete RateSnapshot per call; it never merges with a
previous table and never touches durable storage.
"""
from abc import ABC, abstractmethod

from currency_converter.models.rates import RateSnapshot


class RateProvider(ABC):
    base_currency: str = "USD"

    @abstractmethod
    async def fetch_snapshot(self) -> RateSnapshot:
        """Return a fresh snapshot or raise FetchError."""
        raise NotImplementedError
