"""
Centralised settings loader (pydantic-settings v2).

Every value can be overridden through the environment or a local `.env`.
"""

from __future__ import annotations
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# ------------------------------------------------------------------ #
#  Master settings model
# ------------------------------------------------------------------ #
class _Settings(BaseSettings):
    # ─── runtime ─────────────────────────────────────────────────────
    env_name: str = Field("local", validation_alias="ENV_NAME")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")
    cors_origins: list[str] = Field(["*"], validation_alias="CORS_ORIGINS")

    # ─── persistence ────────────────────────────────────────────────
    database_url: str = Field("sqlite:///./mealcheck.db", validation_alias="DATABASE_URL")
    # corrupt "meals" value: False → fail loudly, True → reseed
    seed_on_corrupt_state: bool = Field(False, validation_alias="SEED_ON_CORRUPT_STATE")

    # ─── header clock ───────────────────────────────────────────────
    clock_interval_s: float = Field(1.0, gt=0, validation_alias="CLOCK_INTERVAL_S")

    model_config = SettingsConfigDict(
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
    )


# ------------------------------------------------------------------ #
#  Cached singleton accessor
# ------------------------------------------------------------------ #
@lru_cache
def _cached() -> _Settings:  # pragma: no cover
    return _Settings()  # type: ignore[call-arg]


settings: _Settings = _cached()
