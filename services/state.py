"""
services/state.py
────────────────────────────────────────────────────────────────────────
One checklist per process: the MealStore, its quick-add form and the
clock display, built lazily and handed to routers through `Depends`.

Tests swap these out with `app.dependency_overrides`.
"""
from __future__ import annotations

from functools import lru_cache

from config import settings
from core.clock import ClockDisplay
from core.meal_store import TARGET_KCAL, MealStore
from core.quick_add import QuickAddForm
from services.kv_store import get_kv_store


@lru_cache
def get_meal_store() -> MealStore:
    store = MealStore(
        get_kv_store(settings.database_url),
        seed_on_corrupt_state=settings.seed_on_corrupt_state,
    )
    store.initialize()
    return store


@lru_cache
def get_quick_add_form() -> QuickAddForm:
    return QuickAddForm(get_meal_store())


@lru_cache
def get_clock_display() -> ClockDisplay:
    return ClockDisplay()


def get_target_kcal() -> int:
    return TARGET_KCAL
