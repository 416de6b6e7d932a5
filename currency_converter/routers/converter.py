from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, ConfigDict, Field

from currency_converter.models.constants import DEFAULT_FROM, DEFAULT_TO
from currency_converter.models.history import ConversionRecord
from currency_converter.routers.deps import get_session
from currency_converter.services.conversion import ConversionOutcome
from currency_converter.services.session import ConverterSession

router = APIRouter(tags=["converter"])


class ConvertIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    amount: str = Field("", description="Amount as typed by the user")
    from_: str = Field(DEFAULT_FROM, alias="from", min_length=3, max_length=4)
    to: str = Field(DEFAULT_TO, min_length=3, max_length=4)


class ConvertOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    amount: str
    from_: str = Field(..., alias="from")
    to: str
    result: str
    status: str
    recorded: bool = False

    @classmethod
    def from_outcome(cls, outcome: ConversionOutcome, recorded: bool = False) -> "ConvertOut":
        return cls(
            amount=outcome.amount,
            from_=outcome.from_code,
            to=outcome.to_code,
            result=outcome.result,
            status=outcome.status,
            recorded=recorded,
        )


class RecordIn(ConvertIn):
    result: str = Field(..., description="Result exactly as displayed")


@router.get("/convert", response_model=ConvertOut, summary="Convert an amount")
async def convert(
    amount: str = Query("", description="Amount as typed by the user"),
    from_code: str = Query(DEFAULT_FROM, alias="from"),
    to_code: str = Query(DEFAULT_TO, alias="to"),
    session: ConverterSession = Depends(get_session),
) -> ConvertOut:
    return ConvertOut.from_outcome(session.convert(amount, from_code, to_code))


@router.post(
    "/convert",
    response_model=ConvertOut,
    summary="Convert an amount and record it when the result is valid",
)
async def convert_and_record(
    payload: ConvertIn,
    session: ConverterSession = Depends(get_session),
) -> ConvertOut:
    outcome, recorded = await session.convert_and_record(
        payload.amount, payload.from_, payload.to
    )
    return ConvertOut.from_outcome(outcome, recorded)


@router.get("/history", response_model=List[ConversionRecord], summary="Conversion history")
async def get_history(
    session: ConverterSession = Depends(get_session),
) -> List[ConversionRecord]:
    return session.get_history()


@router.post(
    "/history",
    response_model=List[ConversionRecord],
    status_code=status.HTTP_201_CREATED,
    summary="Record a displayed conversion",
)
async def record_conversion(
    payload: RecordIn,
    session: ConverterSession = Depends(get_session),
) -> List[ConversionRecord]:
    record = session.build_record(payload.amount, payload.from_, payload.to, payload.result)
    return await session.record_conversion(record)


@router.delete(
    "/history", status_code=status.HTTP_204_NO_CONTENT, summary="Clear conversion history"
)
async def clear_history(session: ConverterSession = Depends(get_session)) -> None:
    await session.clear_history()
