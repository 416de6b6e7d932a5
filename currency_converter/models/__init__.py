"""Pydantic domain models for the currency converter."""

from .constants import (
    BASE_CURRENCY,
    CURRENCY_NAMES,
    ERROR_DISPLAY,
    ZERO_DISPLAY,
)  # re-export
from .currency import Currency, build_currency_list
from .history import ConversionRecord, History, HistoryAdapter
from .rates import RateSnapshot

__all__ = [
    "BASE_CURRENCY",
    "CURRENCY_NAMES",
    "ERROR_DISPLAY",
    "ZERO_DISPLAY",
    "Currency",
    "build_currency_list",
    "ConversionRecord",
    "History",
    "HistoryAdapter",
    "RateSnapshot",
]
