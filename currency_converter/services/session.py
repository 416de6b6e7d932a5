from __future__ import annotations

"""Converter session: the mutable state container owned by the host.

Holds the current RateSnapshot and History and wires the stateless pieces
together (fetch_rates, convert_pair, HistoryStore). Storage calls are pushed
to the thread pool so the event loop keeps serving requests.
"""
import logging
from typing import List, Optional

from starlette.concurrency import run_in_threadpool

from currency_converter.core.errors import (
    FetchError,
    NotRecordableError,
    RatesUnavailableError,
)
from currency_converter.models.currency import Currency, build_currency_list
from currency_converter.models.history import ConversionRecord
from currency_converter.models.rates import RateSnapshot
from currency_converter.services.conversion import (
    ConversionOutcome,
    convert_pair,
    is_recordable,
)
from currency_converter.services.history import HistoryStore
from currency_converter.services.rates.base import RateProvider
from currency_converter.services.rates.providers import fetch_rates

logger = logging.getLogger("currency_converter.session")


class ConverterSession:
    def __init__(self, provider: RateProvider, history_store: HistoryStore):
        self._provider = provider
        self._history_store = history_store
        self.snapshot: Optional[RateSnapshot] = None
        self.history: List[ConversionRecord] = []
        self.startup_error: Optional[FetchError] = None

    async def start(self) -> None:
        """Load the saved history, then the first rate table.

        A failed first fetch is kept in ``startup_error`` rather than raised;
        the host reports it until a refresh succeeds.
        """
        self.history = await run_in_threadpool(self._history_store.load)
        try:
            await self.refresh_rates()
        except FetchError as e:
            self.startup_error = e
            logger.error("initial rate load failed: %s", e)

    # Rates ---------------------------------------------------------
    def get_rates(self) -> RateSnapshot:
        if self.snapshot is None:
            raise RatesUnavailableError(
                str(self.startup_error) if self.startup_error else "rates not loaded"
            )
        return self.snapshot

    async def refresh_rates(self) -> RateSnapshot:
        # On failure the previous snapshot stays in place
        snapshot = await fetch_rates(self._provider)
        self.snapshot = snapshot
        self.startup_error = None
        return snapshot

    def currencies(self) -> List[Currency]:
        return build_currency_list(self.get_rates().rates.keys())

    # Conversion ----------------------------------------------------
    def convert(self, amount: object, from_code: str, to_code: str) -> ConversionOutcome:
        return convert_pair(amount, from_code, to_code, self.snapshot)

    async def convert_and_record(
        self, amount: object, from_code: str, to_code: str
    ) -> tuple[ConversionOutcome, bool]:
        outcome = self.convert(amount, from_code, to_code)
        if not outcome.recordable:
            return outcome, False
        record = self._history_store.build_record(
            outcome.amount, outcome.from_code, outcome.to_code, outcome.result
        )
        await self.record_conversion(record)
        return outcome, True

    # History -------------------------------------------------------
    def get_history(self) -> List[ConversionRecord]:
        return list(self.history)

    def build_record(
        self, amount: str, from_code: str, to_code: str, result: str
    ) -> ConversionRecord:
        return self._history_store.build_record(amount, from_code, to_code, result)

    async def record_conversion(self, record: ConversionRecord) -> List[ConversionRecord]:
        if not is_recordable(record.result):
            raise NotRecordableError(
                f"result {record.result!r} is not a recordable conversion"
            )
        self.history = await run_in_threadpool(
            self._history_store.append, record, self.history
        )
        return self.get_history()

    async def clear_history(self) -> None:
        self.history = await run_in_threadpool(self._history_store.clear)
