from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class ConversionRecord(BaseModel):
    """A single past conversion as it was displayed to the user.

    ``from`` is a Python keyword, so the field is ``from_`` and serializes
    under its alias.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    amount: str
    from_: str = Field(..., alias="from")
    to: str
    result: str
    date: str

    def describe(self) -> str:
        return f"{self.amount} {self.from_} = {self.result} {self.to}"


History = List[ConversionRecord]

HistoryAdapter: TypeAdapter[List[ConversionRecord]] = TypeAdapter(List[ConversionRecord])
