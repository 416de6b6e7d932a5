from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import datetime
from types import MappingProxyType
from typing import Annotated, Any, Dict, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    model_validator,
)

from .constants import BASE_CURRENCY


def _freeze_rates(v: Dict[str, float]) -> Mapping[str, float]:
    for code, rate in v.items():
        if not math.isfinite(rate) or rate <= 0:
            raise ValueError(f"rate for {code} must be a positive number")
    return MappingProxyType(dict(v))


# Validated as a dict, then held as a read-only view; dumps back to a dict.
ReadOnlyRates = Annotated[
    Dict[str, float],
    AfterValidator(_freeze_rates),
    PlainSerializer(lambda v: dict(v), return_type=Dict[str, float]),
]


class RateSnapshot(BaseModel):
    """One fetched rate table, USD-relative. Replaced wholesale on refresh.

    ``rates`` is a read-only mapping; item assignment raises TypeError.
    """

    model_config = ConfigDict(frozen=True)

    base: str = BASE_CURRENCY
    rates: ReadOnlyRates
    fetched_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="before")
    @classmethod
    def normalize_table(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        rates = data.get("rates")
        if not isinstance(rates, Mapping):
            return data
        if not rates:
            raise ValueError("rate table is empty")
        base = str(data.get("base") or BASE_CURRENCY).upper()
        table = {str(code).upper(): rate for code, rate in rates.items()}
        # API payloads normally carry the base itself; it is always 1.0
        table[base] = 1.0
        return {**data, "base": base, "rates": table}

    def rate_for(self, code: Optional[str]) -> Optional[float]:
        if not code:
            return None
        return self.rates.get(code.upper())

    def last_updated(self, fmt: str = "%d/%m/%Y %H:%M:%S") -> str:
        return self.fetched_at.strftime(fmt)
