import logging
import threading
from typing import Callable, Iterable

import pandas as pd


logger = logging.getLogger(__name__)


def coalesce(value) -> str:
    """Normalize a source value to the string stored in a record."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return ""
    return str(value)


class Subscription:
    """Handle returned by TableStore.subscribe."""

    def __init__(self, store, token: int):
        self._store = store
        self._token = token

    @property
    def active(self) -> bool:
        return self._store is not None and self._token in self._store._subscribers

    def unsubscribe(self) -> None:
        if self._store is None:
            return
        with self._store._lock:
            self._store._subscribers.pop(self._token, None)
        self._store = None


class TableStore:
    """Ordered rows for one field schema, held in an object-dtype DataFrame.

    Every mutating call that changes state notifies each subscriber exactly
    once, synchronously, with the new snapshot. Out-of-range indices and
    unknown fields are ignored without notification.
    """

    def __init__(self, fields: Iterable[str]):
        fields = tuple(str(f) for f in fields)
        if len(set(fields)) != len(fields):
            raise ValueError(f"Duplicate field names in schema: {list(fields)}")
        self._fields = fields
        self._df = self._frame([])
        self._subscribers: dict[int, Callable[[list[dict]], None]] = {}
        self._next_token = 0
        self._lock = threading.RLock()

    @property
    def fields(self) -> tuple[str, ...]:
        return self._fields

    def __len__(self) -> int:
        return len(self._df)

    # ---------- normalization ----------
    def normalize(self, row) -> dict:
        row = row or {}
        return {field: coalesce(row.get(field)) for field in self._fields}

    def _frame(self, records: list[dict]) -> pd.DataFrame:
        return pd.DataFrame(records, columns=list(self._fields), dtype=object)

    # ---------- observers ----------
    def subscribe(self, callback: Callable[[list[dict]], None]) -> Subscription:
        with self._lock:
            token = self._next_token
            self._next_token += 1
            self._subscribers[token] = callback
        return Subscription(self, token)

    def _emit(self) -> None:
        rows = self.snapshot()
        for callback in list(self._subscribers.values()):
            callback(rows)

    # ---------- mutations ----------
    def clear(self) -> None:
        with self._lock:
            self._df = self._frame([])
            logger.debug("Cleared store %s", self._fields)
            self._emit()

    def replace_all(self, rows) -> None:
        with self._lock:
            self._df = self._frame([self.normalize(row) for row in rows or []])
            logger.debug("Replaced rows with %d record(s)", len(self._df))
            self._emit()

    def append(self, row) -> None:
        with self._lock:
            added = self._frame([self.normalize(row)])
            if self._df.empty:
                self._df = added
            else:
                self._df = pd.concat([self._df, added], ignore_index=True)
            logger.debug("Appended row %d", len(self._df) - 1)
            self._emit()

    def remove_at(self, index: int) -> None:
        with self._lock:
            if index < 0 or index >= len(self._df):
                logger.debug("Ignored remove_at(%s) with %d row(s)", index, len(self._df))
                return
            self._df = self._df.drop(self._df.index[index]).reset_index(drop=True)
            logger.debug("Removed row %d", index)
            self._emit()

    def update_cell(self, index: int, field: str, value) -> None:
        with self._lock:
            if index < 0 or index >= len(self._df) or field not in self._fields:
                logger.debug("Ignored update_cell(%s, %r)", index, field)
                return
            self._df.at[index, field] = coalesce(value)
            self._emit()

    # ---------- reads ----------
    def snapshot(self) -> list[dict]:
        """Copy of the current records; mutating it does not touch the store."""
        with self._lock:
            return self._df.to_dict(orient="records")

    def to_tsv(self) -> str:
        with self._lock:
            return self._df.to_csv(sep="\t", index=False)
