"""
core/meal_store.py
────────────────────────────────────────────────────────────────────────
Owns today's ordered meal checklist.

Responsibilities
----------------
1.   `initialize()` – adopt the persisted collection or fall back to the
     four seed meals.
2.   `add()` / `toggle()` / `delete()` – the only mutations; each one
     writes the whole collection through to the key-value collaborator
     and notifies subscribers with the new tuple.
3.   `total_consumed_kcal()` / `remaining_kcal()` – always derived from
     the current sequence, never cached.

Confirmation before `delete()` is the caller's job; the store removes
unconditionally.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Iterable

from pydantic import TypeAdapter, ValidationError

from core.models.meal import SEED_MEALS, Meal
from services.kv_store import KeyValueStore

_LOG = logging.getLogger(__name__)

STORAGE_KEY = "meals"
TARGET_KCAL = 1200

Meals = tuple[Meal, ...]
Subscriber = Callable[[Meals], None]

_MEALS_ADAPTER = TypeAdapter(list[Meal])


class PersistedStateError(ValueError):
    """The stored meal collection could not be parsed."""


# ─────────────────────────────── codec ─────────────────────────────── #
def serialize_meals(meals: Iterable[Meal]) -> str:
    return _MEALS_ADAPTER.dump_json(list(meals)).decode("utf-8")


def deserialize_meals(raw: str) -> list[Meal]:
    try:
        return _MEALS_ADAPTER.validate_json(raw)
    except ValidationError as exc:
        raise PersistedStateError(f"stored {STORAGE_KEY!r} value is unreadable: {exc}") from exc


# ─────────────────────────────── store ─────────────────────────────── #
class MealStore:
    def __init__(
        self,
        kv: KeyValueStore,
        *,
        seed_on_corrupt_state: bool = False,
    ) -> None:
        self._kv = kv
        self._seed_on_corrupt = seed_on_corrupt_state
        self._meals: Meals = ()
        self._subscribers: list[Subscriber] = []
        # whole read-modify-write-notify cycle; re-entrant for subscribers
        self._lock = threading.RLock()

    # ──────────────────────────── lifecycle ───────────────────────── #
    def initialize(self, persisted: str | None = None) -> Meals:
        """
        Load once at startup. `persisted` overrides the collaborator read,
        which lets callers hand over a value they already fetched.
        """
        raw = persisted if persisted is not None else self._kv.get(STORAGE_KEY)

        if raw is None:
            _LOG.info("no stored meals – starting from %d seed meals", len(SEED_MEALS))
            meals: Meals = SEED_MEALS
        else:
            try:
                meals = tuple(deserialize_meals(raw))
            except PersistedStateError:
                if not self._seed_on_corrupt:
                    raise
                _LOG.warning("stored meals are corrupt – replacing with seed data")
                meals = SEED_MEALS
            else:
                _LOG.info("restored %d meals from storage", len(meals))

        with self._lock:
            return self._commit(meals)

    @property
    def meals(self) -> Meals:
        return self._meals

    def get(self, meal_id: int) -> Meal | None:
        return next((m for m in self._meals if m.id == meal_id), None)

    # ──────────────────────────── mutations ───────────────────────── #
    def add(self, meal: Meal) -> Meals:
        _LOG.debug("add meal id=%s kcal=%s", meal.id, meal.kcal)
        with self._lock:
            return self._commit(self._meals + (meal,))

    def toggle(self, meal_id: int) -> Meals:
        _LOG.debug("toggle meal id=%s", meal_id)
        with self._lock:
            updated = tuple(
                m.model_copy(update={"checked": not m.checked}) if m.id == meal_id else m
                for m in self._meals
            )
            return self._commit(updated)

    def delete(self, meal_id: int) -> Meals:
        with self._lock:
            remaining = tuple(m for m in self._meals if m.id != meal_id)
            _LOG.debug("delete meal id=%s (%d → %d)", meal_id, len(self._meals), len(remaining))
            return self._commit(remaining)

    # ──────────────────────────── aggregation ─────────────────────── #
    def total_consumed_kcal(self) -> int:
        return sum(m.kcal for m in self._meals if m.checked)

    def remaining_kcal(self, target: int = TARGET_KCAL) -> int:
        """Negative once the target is exceeded."""
        return target - self.total_consumed_kcal()

    # ──────────────────────────── persistence ─────────────────────── #
    def persist(self) -> None:
        self._kv.set(STORAGE_KEY, serialize_meals(self._meals))

    # ──────────────────────────── observers ───────────────────────── #
    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def _commit(self, meals: Meals) -> Meals:
        self._meals = meals
        self.persist()
        for callback in list(self._subscribers):
            callback(self._meals)
        return self._meals
