# tests/test_quick_add.py
from __future__ import annotations

import itertools
import threading

import pytest

from core.meal_store import MealStore
from core.models.meal import DEFAULT_MEAL_TIME
from core.quick_add import (
    MealIdFactory,
    QuickAddDraft,
    QuickAddForm,
    format_macro,
    parse_kcal,
)
from services.kv_store import InMemoryKeyValueStore


def _form() -> tuple[QuickAddForm, MealStore]:
    store = MealStore(InMemoryKeyValueStore())
    store.initialize()
    return QuickAddForm(store), store


def _fill(form: QuickAddForm, **fields: str) -> None:
    for name, value in fields.items():
        form.update_field(name, value)


# ── submit: accepted ────────────────────────────────────────────────
def test_tea_with_blank_macros():
    form, store = _form()
    _fill(form, title="Tea", kcal="50", meal_time="6 AM")

    meal = form.submit()
    assert meal is not None
    assert meal.title == "Tea"
    assert meal.kcal == 50
    assert meal.details == "P 0g . C 0g . F 0g"
    assert meal.time == "6 AM"
    assert meal.checked is False
    assert meal.id not in {1, 2, 3, 4}
    assert store.meals[-1] == meal


def test_macros_are_kept_as_typed():
    form = QuickAddForm(id_factory=lambda: 42)
    _fill(form, title="Paneer wrap", kcal="420", protein="07", carbs="lots", fat="1.50")
    meal = form.submit()
    assert meal.details == "P 07g . C lotsg . F 1.50g"


def test_title_is_stored_as_typed():
    form, _ = _form()
    _fill(form, title="  Tea ", kcal="50")
    assert form.submit().title == "  Tea "

    _fill(form, title="   ", kcal="50")
    assert form.submit() is None


def test_successful_submit_resets_draft():
    form, _ = _form()
    _fill(form, title="Tea", kcal="50", protein="1", meal_time="9 PM")
    form.submit()
    assert form.draft == QuickAddDraft()
    assert form.draft.meal_time == DEFAULT_MEAL_TIME == "7 AM"


def test_ids_stay_unique_across_rapid_submits():
    form, store = _form()
    for i in range(20):
        _fill(form, title=f"Bite {i}", kcal="10")
        form.submit()
    ids = [m.id for m in store.meals]
    assert len(ids) == len(set(ids)) == 24


# ── submit: rejected ────────────────────────────────────────────────
def test_empty_title_is_rejected_and_draft_kept():
    form, store = _form()
    _fill(form, kcal="50", protein="3", meal_time="6 AM")
    before = form.draft

    assert form.submit() is None
    assert form.draft == before
    assert len(store.meals) == 4


@pytest.mark.parametrize("kcal", ["", "abc", "12abc", "-5", "   "])
def test_unusable_kcal_is_rejected(kcal):
    form, store = _form()
    _fill(form, title="Mystery", kcal=kcal)
    assert form.submit() is None
    assert form.draft.title == "Mystery"
    assert len(store.meals) == 4


# ── update_field ────────────────────────────────────────────────────
def test_update_field_accepts_partial_text():
    form, _ = _form()
    draft = form.update_field("kcal", "4")
    assert draft.kcal == "4"
    assert form.update_field("kcal", "").kcal == ""


def test_update_field_rejects_unknown_field_and_slot():
    form, _ = _form()
    with pytest.raises(KeyError):
        form.update_field("sugar", "10")
    with pytest.raises(ValueError):
        form.update_field("meal_time", "25 PM")


# ── helpers ─────────────────────────────────────────────────────────
def test_parse_kcal_truncates_decimals():
    assert parse_kcal(" 250 ") == 250
    assert parse_kcal("99.9") == 99
    assert parse_kcal("1e3") is None


def test_format_macro_only_fills_blanks():
    assert format_macro("") == "0"
    assert format_macro("  ") == "0"
    assert format_macro("lots") == "lots"
    assert format_macro("12.0") == "12.0"


def test_id_factory_uses_milliseconds_and_never_repeats():
    ticks = itertools.chain([5_000_000_000, 5_000_000_000, 5_000_100_000], itertools.repeat(1_000_000))
    factory = MealIdFactory(clock=lambda: next(ticks))
    assert [factory() for _ in range(4)] == [5000, 5001, 5002, 5003]


def test_form_without_store_only_builds_meal():
    form = QuickAddForm(id_factory=lambda: 42)
    _fill(form, title="Tea", kcal="50")
    meal = form.submit()
    assert meal.id == 42


# ── threadpool callers ──────────────────────────────────────────────
def test_concurrent_submits_never_share_an_id():
    form, store = _form()
    barrier = threading.Barrier(8)

    def worker(n: int) -> None:
        barrier.wait()
        for i in range(25):
            form.update_field("title", f"Bite {n}-{i}")
            form.update_field("kcal", "10")
            form.submit()

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    ids = [m.id for m in store.meals]
    assert len(ids) == len(set(ids))


def test_id_factory_is_unique_across_threads():
    factory = MealIdFactory(clock=lambda: 7_000_000_000)
    seen: list[int] = []
    lock = threading.Lock()

    def worker() -> None:
        got = [factory() for _ in range(200)]
        with lock:
            seen.extend(got)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(seen) == list(range(7000, 7000 + 1600))
