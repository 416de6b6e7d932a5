"""Money / rounding helpers.

Centralized so the conversion engine and history records share identical
rounding and display semantics.
"""

from __future__ import annotations
import math
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext

TWO_PLACES = Decimal("0.01")


def round2(value: float) -> Decimal:
    """Round half-up to 2 places using the shortest decimal repr of ``value``.

    ``round2(2.675) == Decimal("2.68")`` even though the binary float sits
    slightly below 2.675; ``round(2.675, 2)`` would give 2.67.
    """
    with localcontext() as ctx:
        ctx.prec = 400  # enough digits for any finite float
        return Decimal(repr(float(value))).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def format2(value: float) -> str:
    """Render ``value`` with exactly two decimals (``"50.00"``)."""
    return str(round2(value))


def parse_amount(raw: object) -> float | None:
    """Parse user input into a finite float; None when it is not a number."""
    if raw is None:
        return None
    text = str(raw).strip()
    if not text or "_" in text:
        return None
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    amount = float(value)
    return amount if math.isfinite(amount) else None
