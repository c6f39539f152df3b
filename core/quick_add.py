"""
core/quick_add.py
────────────────────────────────────────────────────────────────────────
Quick-add form: free-text draft → validated `Meal`.

Numeric fields stay raw text while the user types so a half-typed value
never gets a default forced into it. Parsing and defaulting happen once,
in `QuickAddForm.submit()`.
"""

from __future__ import annotations

import logging
import re
import threading
import time
from decimal import Decimal
from typing import Callable

from pydantic import BaseModel

from core.meal_store import MealStore
from core.models.meal import DEFAULT_MEAL_TIME, TIME_SLOTS, Meal, TimeSlot

_LOG = logging.getLogger(__name__)

_NUMBER = re.compile(r"^\d+(\.\d+)?$")


class QuickAddDraft(BaseModel):
    title: str = ""
    kcal: str = ""
    protein: str = ""
    carbs: str = ""
    fat: str = ""
    meal_time: TimeSlot = DEFAULT_MEAL_TIME


DRAFT_FIELDS: tuple[str, ...] = tuple(QuickAddDraft.model_fields)


class MealIdFactory:
    """Millisecond timestamps, bumped by one on same-millisecond collisions."""

    def __init__(self, clock: Callable[[], int] = time.time_ns) -> None:
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> int:
        with self._lock:
            candidate = self._clock() // 1_000_000
            self._last = max(candidate, self._last + 1)
            return self._last


# ─────────────────────────────── parsing ───────────────────────────── #
def parse_kcal(text: str) -> int | None:
    """Whole kcal from the typed text, or None when it is not a usable number."""
    text = text.strip()
    if not _NUMBER.match(text):
        return None
    return int(Decimal(text))


def format_macro(text: str) -> str:
    """Grams as typed; only a blank field becomes 0."""
    return text if text.strip() else "0"


def format_details(protein: str, carbs: str, fat: str) -> str:
    return f"P {format_macro(protein)}g . C {format_macro(carbs)}g . F {format_macro(fat)}g"


# ─────────────────────────────── form ──────────────────────────────── #
class QuickAddForm:
    def __init__(
        self,
        store: MealStore | None = None,
        id_factory: Callable[[], int] | None = None,
    ) -> None:
        self._store = store
        self._next_id = id_factory or MealIdFactory()
        self._draft = QuickAddDraft()
        # routers run on a threadpool; one edit or submit at a time
        self._lock = threading.Lock()

    @property
    def draft(self) -> QuickAddDraft:
        return self._draft

    def update_field(self, field: str, value: str) -> QuickAddDraft:
        if field not in DRAFT_FIELDS:
            raise KeyError(f"unknown quick-add field: {field!r}")
        if field == "meal_time" and value not in TIME_SLOTS:
            raise ValueError(f"meal_time must be one of the 24 hour slots, got {value!r}")
        with self._lock:
            self._draft = self._draft.model_copy(update={field: value})
            return self._draft

    def build_meal(self, draft: QuickAddDraft) -> Meal | None:
        # whitespace-only counts as blank, but the title is kept as typed
        kcal = parse_kcal(draft.kcal)
        if not draft.title.strip() or kcal is None:
            return None
        return Meal(
            id=self._next_id(),
            title=draft.title,
            kcal=kcal,
            time=draft.meal_time,
            details=format_details(draft.protein, draft.carbs, draft.fat),
            checked=False,
        )

    def submit(self) -> Meal | None:
        """
        Turn the draft into a Meal and hand it to the store.

        Returns None and leaves the draft as-is when the title is blank or
        the kcal text is not a number; on success the draft is reset.
        """
        with self._lock:
            meal = self.build_meal(self._draft)
            if meal is None:
                _LOG.warning(
                    "quick add rejected (title=%r, kcal=%r)", self._draft.title, self._draft.kcal
                )
                return None

            if self._store is not None:
                self._store.add(meal)
            self._draft = QuickAddDraft()
            return meal
