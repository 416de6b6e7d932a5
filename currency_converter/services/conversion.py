from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from currency_converter.models.constants import ERROR_DISPLAY, ZERO_DISPLAY
from currency_converter.models.rates import RateSnapshot
from currency_converter.services.money import format2, parse_amount

"""Conversion engine.

Pure functions only: no I/O and no shared state, so callers may run them on
every input change.

Rules, in order:
    - a missing or non-positive rate on either side -> ERROR_DISPLAY ("Erro"),
      whatever the amount is;
    - an amount that is not a finite number > 0 -> ZERO_DISPLAY ("0.00");
    - otherwise amount / from_rate * to_rate, rounded half-up to 2 places.

Every currency is shown with 2 decimals, including JPY and the crypto codes.
"""

STATUS_OK = "ok"
STATUS_EMPTY = "empty"
STATUS_UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class ConversionOutcome:
    amount: str
    from_code: str
    to_code: str
    result: str
    status: str

    @property
    def recordable(self) -> bool:
        return self.status == STATUS_OK and is_recordable(self.result)


def _usable_rate(rate: Optional[float]) -> bool:
    if rate is None or isinstance(rate, bool):
        return False
    try:
        return math.isfinite(rate) and rate > 0
    except TypeError:
        return False


def convert(amount: object, from_rate: Optional[float], to_rate: Optional[float]) -> str:
    if not (_usable_rate(from_rate) and _usable_rate(to_rate)):
        return ERROR_DISPLAY
    value = parse_amount(amount)
    if value is None or value <= 0:
        return ZERO_DISPLAY
    converted = value / from_rate * to_rate  # type: ignore[operator]
    if not math.isfinite(converted):
        return ERROR_DISPLAY
    return format2(converted)


def convert_pair(
    amount: object,
    from_code: str,
    to_code: str,
    snapshot: Optional[RateSnapshot],
) -> ConversionOutcome:
    from_code = (from_code or "").upper()
    to_code = (to_code or "").upper()
    if snapshot is None:
        from_rate = to_rate = None
    else:
        from_rate = snapshot.rate_for(from_code)
        to_rate = snapshot.rate_for(to_code)
    result = convert(amount, from_rate, to_rate)
    if result == ERROR_DISPLAY:
        status = STATUS_UNAVAILABLE
    elif result == ZERO_DISPLAY:
        status = STATUS_EMPTY
    else:
        status = STATUS_OK
    return ConversionOutcome(
        amount="" if amount is None else str(amount),
        from_code=from_code,
        to_code=to_code,
        result=result,
        status=status,
    )


def is_recordable(result: Optional[str]) -> bool:
    """True only for a positive result shaped like the engine's output ("50.00")."""
    if not result or result in (ERROR_DISPLAY, ZERO_DISPLAY):
        return False
    value = parse_amount(result)
    if value is None or value <= 0:
        return False
    return result == format2(value)
