"""Conversion history store.

History is a newest-first list of ConversionRecord, capped at ``limit`` entries
and persisted as one JSON array under a single storage key.

Failure policy:
  - unreadable or corrupt payloads load as an empty history (logged);
  - a failed write is logged and the in-memory list is still returned, so at
    most the newest record misses durable storage;
  - records whose result is the error or zero-display marker are refused.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import ValidationError

from currency_converter.core.config import Settings
from currency_converter.core.errors import StorageReadError, StorageWriteError
from currency_converter.db.storage import KeyValueStore
from currency_converter.models.history import ConversionRecord, HistoryAdapter
from currency_converter.services.conversion import is_recordable

logger = logging.getLogger("currency_converter.history")

_FIELDS = Settings.model_fields


def new_record_id(now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return f"{int(now.timestamp() * 1000)}-{uuid.uuid4().hex[:8]}"


class HistoryStore:
    def __init__(
        self,
        storage: KeyValueStore,
        key: str = _FIELDS["history_storage_key"].default,
        limit: int = _FIELDS["history_limit"].default,
        date_format: str = _FIELDS["date_format"].default,
    ):
        self._storage = storage
        self.key = key
        self.limit = limit
        self.date_format = date_format

    @classmethod
    def from_settings(cls, storage: KeyValueStore, settings: Settings) -> "HistoryStore":
        return cls(
            storage,
            key=settings.history_storage_key,
            limit=settings.history_limit,
            date_format=settings.date_format,
        )

    def build_record(
        self,
        amount: str,
        from_code: str,
        to_code: str,
        result: str,
        now: Optional[datetime] = None,
    ) -> ConversionRecord:
        """Create a record carrying ``result`` exactly as it was displayed."""
        now = now or datetime.now()
        return ConversionRecord(
            id=new_record_id(now),
            amount=str(amount),
            from_=from_code.upper(),
            to=to_code.upper(),
            result=result,
            date=now.strftime(self.date_format),
        )

    def load(self) -> List[ConversionRecord]:
        try:
            raw = self._storage.get_item(self.key)
        except StorageReadError:
            logger.exception("failed to read conversion history", extra={"key": self.key})
            return []
        if raw is None:
            return []
        try:
            records = HistoryAdapter.validate_json(raw)
        except ValidationError:
            logger.warning("discarding corrupt conversion history", extra={"key": self.key})
            return []
        return records[: self.limit]

    def _save(self, history: List[ConversionRecord]) -> None:
        payload = HistoryAdapter.dump_json(history, by_alias=True).decode("utf-8")
        self._storage.set_item(self.key, payload)

    def append(
        self, record: ConversionRecord, current: List[ConversionRecord]
    ) -> List[ConversionRecord]:
        if not is_recordable(record.result):
            logger.debug("refusing to record result %r", record.result)
            return list(current)
        history = [record, *current][: self.limit]
        try:
            self._save(history)
        except StorageWriteError:
            logger.exception(
                "failed to persist conversion history", extra={"count": len(history)}
            )
        return history

    def clear(self) -> List[ConversionRecord]:
        try:
            self._storage.remove_item(self.key)
        except StorageWriteError:
            logger.exception("failed to clear conversion history", extra={"key": self.key})
        return []
