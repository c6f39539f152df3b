"""
services/db.py
────────────────────────────────────────────────────────────────────────
* SQLAlchemy v2 setup (sync; every write is a single short transaction)
* The one table backing the key-value persistence collaborator
* Session helper used by `services.kv_store.SqlKeyValueStore`
"""
from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from typing import Iterator

from sqlalchemy import DateTime, Engine, String, Text, create_engine, func
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker

from config import settings

# ───────── connection helper ────────────────────────────────────────
_ENGINES: dict[str, Engine] = {}


def _create_engine(url: str) -> Engine:
    kwargs: dict = {"pool_pre_ping": True}
    if url.startswith("sqlite"):
        # the API serves requests from a threadpool
        kwargs["connect_args"] = {"check_same_thread": False}
    return create_engine(url, **kwargs)


def engine(url: str | None = None) -> Engine:
    """One engine per URL for the life of the process; defaults to `settings.database_url`."""
    url = url or settings.database_url
    if url not in _ENGINES:
        _ENGINES[url] = _create_engine(url)
    return _ENGINES[url]


def dispose_engines() -> None:
    for eng in _ENGINES.values():
        eng.dispose()
    _ENGINES.clear()


# ───────── declarative base ──────────────────────────────────────────
class Base(DeclarativeBase):
    pass


class KeyValue(Base):
    __tablename__ = "key_value"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(Text)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now()
    )


def create_tables(eng: Engine) -> None:
    Base.metadata.create_all(eng)


# ───────── session helper ────────────────────────────────────────────
@contextmanager
def get_session(eng: Engine) -> Iterator[Session]:
    factory = sessionmaker(eng, expire_on_commit=False)
    with factory() as session:
        yield session
