from __future__ import annotations

from datetime import datetime
from typing import Dict, List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from currency_converter.core.config import Settings
from currency_converter.models.currency import Currency
from currency_converter.models.rates import RateSnapshot
from currency_converter.routers.deps import get_app_settings, get_session
from currency_converter.services.session import ConverterSession

"""Rates router.

Endpoints:
    - GET /rates          -> current snapshot (503 before the first successful fetch)
    - POST /rates/refresh -> fetch a new snapshot (502 on failure, old one kept)
    - GET /currencies     -> selectable currencies for the current snapshot
"""

router = APIRouter(tags=["rates"])


class RatesOut(BaseModel):
    base: str
    rates: Dict[str, float]
    fetched_at: datetime
    last_updated: str

    @classmethod
    def from_snapshot(cls, snapshot: RateSnapshot, settings: Settings) -> "RatesOut":
        return cls(
            base=snapshot.base,
            rates=dict(snapshot.rates),
            fetched_at=snapshot.fetched_at,
            last_updated=snapshot.last_updated(settings.datetime_format),
        )


@router.get("/rates", response_model=RatesOut, summary="Current rate snapshot")
async def get_rates(
    session: ConverterSession = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
) -> RatesOut:
    return RatesOut.from_snapshot(session.get_rates(), settings)


@router.post("/rates/refresh", response_model=RatesOut, summary="Fetch a new rate snapshot")
async def refresh_rates(
    session: ConverterSession = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
) -> RatesOut:
    snapshot = await session.refresh_rates()
    return RatesOut.from_snapshot(snapshot, settings)


@router.get("/currencies", response_model=List[Currency], summary="Selectable currencies")
async def list_currencies(
    session: ConverterSession = Depends(get_session),
) -> List[Currency]:
    return session.currencies()
