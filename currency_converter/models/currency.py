from __future__ import annotations

from typing import Iterable, List

from pydantic import BaseModel, ConfigDict, Field

from .constants import CURRENCY_NAMES


class Currency(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str = Field(..., min_length=3, max_length=4)
    name: str

    @classmethod
    def from_code(cls, code: str) -> "Currency":
        code = code.upper()
        return cls(code=code, name=CURRENCY_NAMES.get(code, code))


def build_currency_list(codes: Iterable[str]) -> List[Currency]:
    """Currency entries for every code of a rate snapshot, in snapshot order.

    Codes outside the 3-4 letter range are skipped rather than failing the list.
    """
    out: List[Currency] = []
    for code in codes:
        if 3 <= len(code) <= 4:
            out.append(Currency.from_code(code))
    return out
