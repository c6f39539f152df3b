"""
services/kv_store.py
────────────────────────────────────────────────────────────────────────
Persistence collaborator for MealStore: an opaque string key-value store.

Contract
--------
* `get(key)`        → last value written under `key`, or None
* `set(key, value)` → replace the whole value atomically

Two implementations:

* `InMemoryKeyValueStore` – dict-backed, used by tests and scratch runs
* `SqlKeyValueStore`      – one row per key in the `key_value` table
"""

from __future__ import annotations

import logging
from typing import Protocol

from sqlalchemy import Engine

from services.db import KeyValue, create_tables, engine, get_session

_LOG = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryKeyValueStore:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})
        self.writes = 0

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self.writes += 1


class SqlKeyValueStore:
    def __init__(self, eng: Engine) -> None:
        self._engine = eng
        create_tables(eng)

    def get(self, key: str) -> str | None:
        with get_session(self._engine) as db:
            row = db.get(KeyValue, key)
            return row.value if row is not None else None

    def set(self, key: str, value: str) -> None:
        with get_session(self._engine) as db:
            db.merge(KeyValue(key=key, value=value))
            db.commit()
        _LOG.debug("wrote %d chars under %r", len(value), key)


def get_kv_store(database_url: str | None = None) -> SqlKeyValueStore:
    return SqlKeyValueStore(engine(database_url))
